pytest_plugins = ['pyipset.fixtures.executor']
