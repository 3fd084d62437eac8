"""Chaos-strategy and timeline-action catalogs: per-kind parameter variants and default factories."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field, fields, replace
from enum import Enum
from typing import Any, Callable, Mapping, Optional, Union

from utils.coercion import coerce_like, to_non_negative_int

LOG = logging.getLogger(__name__)


class ChaosKind(str, Enum):
    """Fault-injection strategies the execution engine understands."""
    network_loss = "network_loss"
    message_corruption = "message_corruption"
    connection_flooding = "connection_flooding"
    response_delay = "response_delay"


class TimelineAction(str, Enum):
    """Actions a timeline event can schedule."""
    create_chargers = "create_chargers"
    start_flow = "start_flow"
    inject_chaos = "inject_chaos"
    start_monitoring = "start_monitoring"
    stop_flow = "stop_flow"


# ---------------------------------------------------------------------------
# Chaos parameter variants
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class NetworkLossParams:
    duration: int = 30
    reconnect_delay: int = 5
    auto_reconnect: bool = True

    def as_dict(self) -> dict[str, Any]:
        return {
            "duration": self.duration,
            "reconnect_delay": self.reconnect_delay,
            "auto_reconnect": self.auto_reconnect,
        }


MESSAGE_TYPE_GROUPS = ("all", "transactions", "status", "heartbeat")


@dataclass(frozen=True)
class MessageCorruptionParams:
    corruption_rate: float = 0.1
    message_types: str = "all"

    def as_dict(self) -> dict[str, Any]:
        return {"corruption_rate": self.corruption_rate, "message_types": self.message_types}


@dataclass(frozen=True)
class ConnectionFloodingParams:
    rate: int = 10
    burst_duration: int = 30

    def as_dict(self) -> dict[str, Any]:
        return {"rate": self.rate, "burst_duration": self.burst_duration}


@dataclass(frozen=True)
class ResponseDelayParams:
    min_delay: int = 1000
    max_delay: int = 5000

    def as_dict(self) -> dict[str, Any]:
        return {"min_delay": self.min_delay, "max_delay": self.max_delay}


ChaosParams = Union[NetworkLossParams, MessageCorruptionParams, ConnectionFloodingParams, ResponseDelayParams]


# ---------------------------------------------------------------------------
# Timeline action parameter variants
# ---------------------------------------------------------------------------

FLOW_TYPES = (
    "boot_notification",
    "charging_session",
    "heartbeat_sequence",
    "meter_values",
    "status_updates",
    "rapid_heartbeat",
)


@dataclass(frozen=True)
class CreateChargersParams:
    prefix: str = "LOAD"

    def as_dict(self) -> dict[str, Any]:
        return {"prefix": self.prefix} if self.prefix else {}


@dataclass(frozen=True)
class StartFlowParams:
    flow: str = ""
    interval: Optional[int] = None

    def as_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        if self.flow:
            out["flow"] = self.flow
        if self.interval is not None:
            out["interval"] = self.interval
        return out


@dataclass(frozen=True)
class OpenParams:
    """Free-form parameters for actions without a fixed schema."""
    values: dict[str, Any] = field(default_factory=dict)

    def as_dict(self) -> dict[str, Any]:
        return dict(self.values)


ActionParams = Union[CreateChargersParams, StartFlowParams, OpenParams]


def _overlay(params: Any, values: Mapping[str, Any]) -> Any:
    """Return params with known keys from values coerced onto it; unknown keys are dropped."""
    changes: dict[str, Any] = {}
    for f in fields(params):
        if f.name not in values:
            continue
        current = getattr(params, f.name)
        raw = values[f.name]
        if f.default is None:
            # Optional fields are intervals in seconds: blank clears, otherwise >= 1.
            changes[f.name] = None if raw in (None, "") else max(1, to_non_negative_int(raw))
        else:
            changes[f.name] = coerce_like(current, raw)
    return replace(params, **changes) if changes else params


def _bounded_corruption(params: MessageCorruptionParams) -> MessageCorruptionParams:
    rate = min(1.0, params.corruption_rate)
    types = params.message_types if params.message_types in MESSAGE_TYPE_GROUPS else "all"
    return replace(params, corruption_rate=rate, message_types=types)


def _bounded_flow(params: StartFlowParams) -> StartFlowParams:
    if params.flow and params.flow not in FLOW_TYPES:
        LOG.debug("Unknown flow type cleared: %r", params.flow)
        return replace(params, flow="")
    return params


# ---------------------------------------------------------------------------
# Registries
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ChaosStrategyInfo:
    kind: ChaosKind
    display_name: str
    description: str
    required_param_keys: tuple[str, ...]
    default_params: Callable[[], ChaosParams]
    normalize: Callable[[Any], Any] = lambda params: params

    def build_params(self, values: Optional[Mapping[str, Any]] = None, base: Optional[ChaosParams] = None) -> ChaosParams:
        """Default-fill, overlay known keys from values, then clamp to the kind's bounds."""
        params = base if base is not None else self.default_params()
        return self.normalize(_overlay(params, values or {}))


CHAOS_STRATEGIES: dict[ChaosKind, ChaosStrategyInfo] = {
    ChaosKind.network_loss: ChaosStrategyInfo(
        kind=ChaosKind.network_loss,
        display_name="Network Loss",
        description="Simulate connection drops and reconnections",
        required_param_keys=("duration", "reconnect_delay", "auto_reconnect"),
        default_params=NetworkLossParams,
    ),
    ChaosKind.message_corruption: ChaosStrategyInfo(
        kind=ChaosKind.message_corruption,
        display_name="Message Corruption",
        description="Send malformed OCPP messages",
        required_param_keys=("corruption_rate", "message_types"),
        default_params=MessageCorruptionParams,
        normalize=_bounded_corruption,
    ),
    ChaosKind.connection_flooding: ChaosStrategyInfo(
        kind=ChaosKind.connection_flooding,
        display_name="Connection Flooding",
        description="Rapid connection/disconnection cycles",
        required_param_keys=("rate", "burst_duration"),
        default_params=ConnectionFloodingParams,
    ),
    ChaosKind.response_delay: ChaosStrategyInfo(
        kind=ChaosKind.response_delay,
        display_name="Response Delay",
        description="Simulate slow CSMS responses",
        required_param_keys=("min_delay", "max_delay"),
        default_params=ResponseDelayParams,
    ),
}


@dataclass(frozen=True)
class TimelineActionInfo:
    action: TimelineAction
    display_name: str
    # None means the action takes an open parameter map.
    accepted_param_keys: Optional[tuple[str, ...]]
    default_params: Callable[[], ActionParams]
    normalize: Callable[[Any], Any] = lambda params: params

    def build_params(self, values: Optional[Mapping[str, Any]] = None, base: Optional[ActionParams] = None) -> ActionParams:
        """Default-fill then overlay values and normalize; open actions keep every string-keyed entry."""
        params = base if base is not None else self.default_params()
        values = values or {}
        if isinstance(params, OpenParams):
            merged = dict(params.values)
            merged.update({str(k): v for k, v in values.items()})
            return OpenParams(values=merged)
        return self.normalize(_overlay(params, values))


TIMELINE_ACTIONS: dict[TimelineAction, TimelineActionInfo] = {
    TimelineAction.create_chargers: TimelineActionInfo(
        TimelineAction.create_chargers, "Create Chargers", ("prefix",), CreateChargersParams
    ),
    TimelineAction.start_flow: TimelineActionInfo(
        TimelineAction.start_flow, "Start Flow", ("flow", "interval"), StartFlowParams, _bounded_flow
    ),
    TimelineAction.inject_chaos: TimelineActionInfo(
        TimelineAction.inject_chaos, "Inject Chaos", None, OpenParams
    ),
    TimelineAction.start_monitoring: TimelineActionInfo(
        TimelineAction.start_monitoring, "Start Monitoring", None, OpenParams
    ),
    TimelineAction.stop_flow: TimelineActionInfo(
        TimelineAction.stop_flow, "Stop Flow", None, OpenParams
    ),
}


def get_strategy_info(kind: Any) -> Optional[ChaosStrategyInfo]:
    """Look up a chaos kind by enum or name. Unknown kinds return None."""
    try:
        return CHAOS_STRATEGIES[ChaosKind(kind)]
    except ValueError:
        LOG.debug("Unknown chaos strategy kind ignored: %r", kind)
        return None


def get_action_info(action: Any) -> Optional[TimelineActionInfo]:
    """Look up a timeline action by enum or name. Unknown actions return None."""
    try:
        return TIMELINE_ACTIONS[TimelineAction(action)]
    except ValueError:
        LOG.debug("Unknown timeline action ignored: %r", action)
        return None
