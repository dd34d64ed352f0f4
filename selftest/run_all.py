"""Run all selftests.

Usage:
  python -m selftest.run_all

Calls every fixture-free ``test_*`` function directly so a bare checkout can be sanity
checked without pytest. Tests that take fixtures or parameters are left to pytest.
"""

import importlib
import inspect


TEST_MODULES = [
    'selftest.test_interp',
    'selftest.test_heat_field',
    'selftest.test_entities',
    'selftest.test_group_scheduler',
    'selftest.test_phase_machine',
    'selftest.test_compositor',
    'selftest.test_occupancy',
    'selftest.test_params',
    'selftest.test_registry',
    'selftest.test_effects_contract',
    'selftest.test_choreography',
    'selftest.test_aquarium',
    'selftest.test_app',
    'selftest.test_preview',
]


def main():
    failures = []
    ran = 0
    skipped = 0
    for modname in TEST_MODULES:
        try:
            m = importlib.import_module(modname)
        except Exception as e:
            failures.append((modname, e))
            continue
        for name, fn in sorted(vars(m).items()):
            if not name.startswith("test_") or not callable(fn):
                continue
            if inspect.signature(fn).parameters or hasattr(fn, "pytestmark"):
                skipped += 1
                continue
            try:
                fn()
                ran += 1
            except Exception as e:
                failures.append((f"{modname}.{name}", e))

    if failures:
        print("\nFAILED:")
        for where, e in failures:
            print(f"- {where}: {type(e).__name__}: {e}")
        raise SystemExit(1)

    print(f"\nOK: {ran} selftests passed ({skipped} need pytest)")


if __name__ == "__main__":
    main()
