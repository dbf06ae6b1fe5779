"""Platform helpers for bgrun."""

from bgrun.util.process import describe_exit_status, process_group_kwargs

__all__ = ["describe_exit_status", "process_group_kwargs"]
