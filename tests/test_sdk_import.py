"""Smoke test: verify the public API imports without error."""

import sys


def test_engine_import():
    from beacons import compile_results, generate_fallback_text, sorted_results
    assert compile_results is not None
    assert generate_fallback_text is not None
    assert sorted_results is not None


def test_schema_import():
    from beacons import BeaconDefinition, InvalidAnswerCount, ResponseRecord
    assert BeaconDefinition is not None
    assert InvalidAnswerCount is not None
    assert ResponseRecord is not None


def test_version():
    from beacons import __version__
    assert __version__ == "0.1.0"


def test_no_cli_imports():
    """beacons package must not import typer or rich at module level."""
    cli_packages = {"typer", "rich"}
    pre_existing = cli_packages & set(sys.modules.keys())

    import beacons  # noqa: F401

    newly_loaded = (cli_packages & set(sys.modules.keys())) - pre_existing
    assert not newly_loaded, f"beacons imported CLI packages: {newly_loaded}"
