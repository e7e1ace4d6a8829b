# the ipset binary and the arguments every call ends with:
# all the output is requested in XML, so the listing commands
# may be decoded
ipset_cmd = 'ipset'
ipset_mandatory_args = ('-o', 'xml')

# set spec defaults
default_set_type = 'hash:ip'
default_family = 'inet'
default_hashsize = 1024
default_maxelem = 65536

# IPSET_MAXNAMELEN from the kernel headers, including the NUL byte
ipset_maxnamelen = 32

# None means no timeout
default_exec_timeout = None

lock_path = '/run/ipset.lock'
lock_poll_interval = 0.2
lock_timeout = 2
