"""CI platform bindings: event context in, outputs out."""

from affected.ci.context import EventContext, load_event_payload
from affected.ci.outputs import output_file_from_env, report_failure, write_outputs

__all__ = [
    "EventContext",
    "load_event_payload",
    "output_file_from_env",
    "report_failure",
    "write_outputs",
]
