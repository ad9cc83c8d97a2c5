"""Overrides forwarded to every publish task.

Unknown CLI tokens (``--access=public``, ``--provenance``) are parsed into a
key/value set, then the named publish flags are patched on top so that they
always win over a raw token for the same key.
"""

from __future__ import annotations

from collections.abc import Sequence

from relpub.release.contracts import OverrideValue, Overrides, PublishOptions

UNPARSED_KEY = "__overrides_unparsed__"


def _coerce(value: str) -> OverrideValue:
    if value == "true":
        return True
    if value == "false":
        return False
    try:
        return int(value)
    except ValueError:
        return value


def create_overrides(unparsed: Sequence[str]) -> Overrides:
    """Parse raw option tokens.

    ``--key=value`` and ``--key value`` set a value, a lone ``--flag`` is
    True and ``--no-flag`` is False. Everything after ``--`` and every bare
    token is positional and collected under ``_``. Repeated keys keep the
    last value.
    """
    overrides: Overrides = {}
    positional: list[str] = []
    tokens = list(unparsed)
    i = 0

    while i < len(tokens):
        token = tokens[i]
        i += 1

        if token == "--":
            positional.extend(tokens[i:])
            break

        if not token.startswith("-") or token == "-":
            positional.append(token)
            continue

        name = token.lstrip("-")
        if "=" in name:
            key, value = name.split("=", 1)
            overrides[key] = _coerce(value)
            continue

        if name.startswith("no-") and len(name) > 3:
            overrides[name[3:]] = False
            continue

        if i < len(tokens) and not tokens[i].startswith("-"):
            overrides[name] = _coerce(tokens[i])
            i += 1
            continue

        overrides[name] = True

    if positional:
        overrides["_"] = positional
    overrides[UNPARSED_KEY] = list(unparsed)
    return overrides


def build_publish_overrides(options: PublishOptions) -> Overrides:
    """Overrides for one group dispatch.

    Named flags are only set when truthy, so an absent flag never injects an
    empty or false key over a raw token.
    """
    overrides = create_overrides(options.overrides_unparsed)

    if options.registry:
        overrides["registry"] = options.registry
    if options.tag:
        overrides["tag"] = options.tag
    if options.otp:
        overrides["otp"] = options.otp
    if options.dry_run:
        overrides["dryRun"] = options.dry_run
    if options.first_release:
        overrides["firstRelease"] = options.first_release

    return overrides


def overrides_to_args(overrides: Overrides) -> list[str]:
    """Render overrides back into command line arguments for a task."""
    args: list[str] = []
    for key, value in overrides.items():
        if key in ("_", UNPARSED_KEY):
            continue
        if value is True:
            args.append(f"--{key}")
        elif value is False:
            args.append(f"--no-{key}")
        elif isinstance(value, list):
            args.extend(f"--{key}={item}" for item in value)
        else:
            args.append(f"--{key}={value}")

    positional = overrides.get("_")
    if isinstance(positional, list):
        args.extend(positional)
    return args
