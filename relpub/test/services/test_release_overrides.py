from __future__ import annotations

from relpub.release.contracts import PublishOptions
from relpub.services.release.overrides import (
    UNPARSED_KEY,
    build_publish_overrides,
    create_overrides,
    overrides_to_args,
)


def test_create_overrides_parses_common_token_shapes() -> None:
    tokens = ["--access=public", "--provenance", "--no-git-checks", "--retries", "3", "extra"]
    overrides = create_overrides(tokens)

    assert overrides["access"] == "public"
    assert overrides["provenance"] is True
    assert overrides["git-checks"] is False
    assert overrides["retries"] == 3
    assert overrides["_"] == ["extra"]
    assert overrides[UNPARSED_KEY] == tokens


def test_create_overrides_coerces_booleans() -> None:
    overrides = create_overrides(["--strict=false", "--fast=true"])
    assert overrides["strict"] is False
    assert overrides["fast"] is True


def test_create_overrides_double_dash_ends_options() -> None:
    overrides = create_overrides(["--a=1", "--", "--not-an-option"])
    assert overrides["a"] == 1
    assert overrides["_"] == ["--not-an-option"]


def test_create_overrides_empty() -> None:
    assert create_overrides([]) == {UNPARSED_KEY: []}


def test_named_flags_override_raw_tokens() -> None:
    options = PublishOptions(
        tag="beta",
        dry_run=True,
        overrides_unparsed=("--tag=latest", "--dryRun=false"),
    )
    overrides = build_publish_overrides(options)
    assert overrides["tag"] == "beta"
    assert overrides["dryRun"] is True


def test_falsy_flags_keep_raw_tokens() -> None:
    options = PublishOptions(overrides_unparsed=("--tag=latest",))
    overrides = build_publish_overrides(options)
    assert overrides["tag"] == "latest"
    assert "dryRun" not in overrides


def test_overrides_to_args_round_trip_shape() -> None:
    overrides = build_publish_overrides(
        PublishOptions(
            registry="https://r",
            dry_run=True,
            overrides_unparsed=("--no-git-checks", "pos"),
        )
    )
    args = overrides_to_args(overrides)

    assert "--registry=https://r" in args
    assert "--dryRun" in args
    assert "--no-git-checks" in args
    assert args[-1] == "pos"
    assert not any(UNPARSED_KEY in a for a in args)
