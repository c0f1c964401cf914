#!/usr/bin/env python3

### edit_candidate.py
#   Copyright 2021-2024 Nokia
###

"""Example to show how to write configuration in a transaction and handle exceptions"""

# Import sys for returning specific exit codes
import sys

# Import the exceptions that are referenced so they can be caught on error.
from pyncedit.exceptions import CommitFailedError, RpcFailureError

# Import the connect method and the datastore selector from the management sub-module
from pyncedit.management import LogicalDatastore, connect


def get_connection(host=None, credentials=None):
    """Function definition to obtain a Connection object to a specific device."""
    try:
        connection_object = connect(
            host=host,
            username=credentials["username"],
            password=credentials["password"],
            ns_map={"example-system": "urn:example:system"},
        )
        print("Connection established successfully")
        return connection_object

    # Errors that occur during the creation of the Connection object
    except RuntimeError as error1:
        print(
            "Failed to connect during the creation of the Connection object.  Error:",
            error1,
        )
        sys.exit(101)


def main():
    """Add two users and commit them, or leave the configuration untouched"""
    connection_object = get_connection(
        host="192.168.1.1",
        credentials={"username": "myusername", "password": "mypassword"},
    )
    tx = connection_object.new_write_transaction()
    users = {"fred": "admin", "barney": "operator"}

    try:
        for name, user_type in users.items():
            path = '/example-system:system/user[name="' + name + '"]'
            print("  {: <15}: {: <}".format(*["Path", path]))
            tx.merge(LogicalDatastore.configuration, path, {"type": user_type})
        tx.submit().result()
        print("Transaction", tx.identifier, "committed")

    # The device rejected one of the edits.  Every rpc-error is available
    # exactly as the device reported it.
    except RpcFailureError as error2:
        print("Edit of", error2.path, "failed")
        for remote_error in error2.errors:
            print("  ", remote_error.tag, remote_error.message)
        tx.cancel()
        sys.exit(102)

    # The commit failed, the cause carries the errors of the device
    except CommitFailedError as error3:
        print("Commit failed.  Error:", error3.cause)
        sys.exit(103)

    finally:
        connection_object.disconnect()


if __name__ == "__main__":
    main()
