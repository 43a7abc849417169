from ._dispatcher import WILDCARD_MATCHERS, HookDispatcher, event_environment, rule_matches

__all__ = [
    "WILDCARD_MATCHERS",
    "HookDispatcher",
    "event_environment",
    "rule_matches",
]
