"""Selftests: pytest collects test_*.py here; run_all.py runs the fixture-free ones."""
