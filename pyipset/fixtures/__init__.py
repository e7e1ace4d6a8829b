'''
Test fixtures.

Load the fixtures as a pytest plugin in a `conftest.py` to test
code that uses :class:`pyipset.IPSet` without running the real
`ipset`:

.. code-block:: python

    pytest_plugins = ['pyipset.fixtures.executor']

The module requires pytest.
'''
