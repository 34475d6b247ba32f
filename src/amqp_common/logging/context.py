"""Context variables for structured logging."""

from contextvars import ContextVar
from typing import Dict, Optional

_component: ContextVar[str] = ContextVar("component", default="")
_entity: ContextVar[str] = ContextVar("entity", default="")
_container_id: ContextVar[str] = ContextVar("container_id", default="")
_trace_id: ContextVar[str] = ContextVar("trace_id", default="")


def set_log_context(
    component: Optional[str] = None,
    entity: Optional[str] = None,
    container_id: Optional[str] = None,
    trace_id: Optional[str] = None,
) -> None:
    if component is not None:
        _component.set(component)
    if entity is not None:
        _entity.set(entity)
    if container_id is not None:
        _container_id.set(container_id)
    if trace_id is not None:
        _trace_id.set(trace_id)


def get_log_context() -> Dict[str, str]:
    return {
        "component": _component.get(),
        "entity": _entity.get(),
        "container_id": _container_id.get(),
        "trace_id": _trace_id.get(),
    }


def clear_log_context() -> None:
    _component.set("")
    _entity.set("")
    _container_id.set("")
    _trace_id.set("")
