import os
import tempfile

#
# Defaults below are overwritten by the first configuration file found in
# $BLOCKSCF_CONFIG_FILE, ./.blockscf_conf.py, ~/.blockscf_conf.py
#

DEBUG = False

TMPDIR = os.environ.get('BLOCKSCF_TMPDIR', tempfile.gettempdir())

VERBOSE = 3  # default logger level (logger.NOTE)

for conf_file in (os.environ.get('BLOCKSCF_CONFIG_FILE', None),
                  os.path.join(os.path.abspath('.'), '.blockscf_conf.py'),
                  os.path.join(os.environ.get('HOME', '.'), '.blockscf_conf.py')):
    if conf_file is not None and os.path.isfile(conf_file):
        break
else:
    conf_file = None

if conf_file is not None:
    with open(conf_file, 'r') as f:
        exec(f.read())
    del f
del (os, tempfile)

#
# Parameters initialized after the configuration file are kept as they are.
#
