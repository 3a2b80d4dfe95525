# Integration Module
"""
Verification and logging: known-answer self test, reference cross-check,
and the event log they report to.
"""

# Lazy imports to avoid RuntimeWarning when running module directly
def __getattr__(name):
    """Lazy import to avoid circular import issues."""
    from . import event_logger, selftest
    for module in (event_logger, selftest):
        if hasattr(module, name):
            return getattr(module, name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")

__all__ = [
    'EventType',
    'DigestEvent',
    'EventLogger',
    'create_event_logger',
    'SelfTestReport',
    'run_known_answer_tests',
    'cross_check_reference',
    'run_selftest',
]
