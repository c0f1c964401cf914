# Copyright 2021-2024 Nokia

__all__ = ("management", "transaction", "exceptions", "instance_path", "edit_structure",
           "edit_config", "rpc", "normalizer", )

__doc__ = """Library for NETCONF write transactions on model-driven nodes."""

__version__ = "0.1.0"
