# ================================
# file: appio/__init__.py
# ================================
from appio.logger import log_to_file, open_run_log, RunLogger
from appio.descriptor import read_descriptor, write_descriptor

__all__ = ["log_to_file", "open_run_log", "RunLogger", "read_descriptor", "write_descriptor"]
