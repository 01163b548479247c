from bitperm.eval.selftest import (
    DEFAULT_SELFTEST_BITS,
    SelfTestReport,
    SpaceResult,
    check_space,
    lexicographic_bitmaps,
    run_self_test,
    self_test,
)

__all__ = [
    "DEFAULT_SELFTEST_BITS",
    "SelfTestReport",
    "SpaceResult",
    "check_space",
    "lexicographic_bitmaps",
    "run_self_test",
    "self_test",
]
