# Copyright 2021-2024 Nokia

from ncclient.xml_ import BASE_NS_1_0, qualify

# based on RFC 6241, all names in the NETCONF base namespace
NETCONF_NS = BASE_NS_1_0

# rpc
EDIT_CONFIG = qualify("edit-config")
COMMIT = qualify("commit")
DISCARD_CHANGES = qualify("discard-changes")

# edit-config
CONFIG = qualify("config")
TARGET = qualify("target")
DEFAULT_OPERATION = qualify("default-operation")
ERROR_OPTION = qualify("error-option")
OPERATION = qualify("operation")        # operation attribute

# datastores
CANDIDATE = qualify("candidate")
RUNNING = qualify("running")

# error-option
ROLLBACK_ON_ERROR = "rollback-on-error"

# capabilities
CANDIDATE_CAPABILITY = ":candidate"
ROLLBACK_ON_ERROR_CAPABILITY = ":rollback-on-error"
