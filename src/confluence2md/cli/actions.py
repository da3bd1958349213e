"""Argparse actions that take their defaults from environment variables.

Every option ``--some-flag`` can be defaulted from ``CONFLUENCE2MD_SOME_FLAG``.
Explicit command-line arguments always win over the environment.
"""

#  Copyright (c) 2025 Tom Villani, Ph.D.

import argparse
import logging
import os

ENV_PREFIX = "CONFLUENCE2MD_"

TRUE_VALUES = ("true", "1", "yes", "on")

logger = logging.getLogger(__name__)


def env_key_for(dest: str) -> str:
    """Return the environment variable name for an argument destination.

    Examples
    --------
    >>> env_key_for("base_url")
    'CONFLUENCE2MD_BASE_URL'

    """
    return ENV_PREFIX + dest.upper().replace("-", "_")


def _dest_from_options(option_strings, kwargs) -> str | None:
    dest = kwargs.get("dest")
    if dest:
        return dest
    for option in option_strings:
        if option.startswith("--"):
            return option[2:].replace("-", "_")
    return None


class EnvironmentAwareAction(argparse.Action):
    """Store action whose default can come from the environment."""

    def __init__(self, option_strings, **kwargs):
        dest = _dest_from_options(option_strings, kwargs)
        if dest:
            env_key = env_key_for(dest)
            env_value = os.environ.get(env_key)
            if env_value is not None:
                converter = kwargs.get("type")
                try:
                    value = converter(env_value) if converter else env_value
                except (ValueError, TypeError) as e:
                    logger.warning("Invalid environment variable %s=%s: %s", env_key, env_value, e)
                else:
                    choices = kwargs.get("choices")
                    if choices is not None and value not in choices:
                        logger.warning("Ignoring %s=%s: expected one of %s", env_key, env_value, list(choices))
                    else:
                        kwargs["default"] = value

        super().__init__(option_strings, **kwargs)

    def __call__(self, parser, namespace, values, option_string=None):
        """Store the value given on the command line."""
        setattr(namespace, self.dest, values)


class EnvironmentAwareBooleanAction(argparse._StoreTrueAction):
    """Store-true action whose default can come from the environment."""

    def __init__(self, option_strings, **kwargs):
        dest = _dest_from_options(option_strings, kwargs)
        if dest:
            env_value = os.environ.get(env_key_for(dest))
            if env_value is not None:
                kwargs["default"] = env_value.strip().lower() in TRUE_VALUES

        super().__init__(option_strings, **kwargs)


def add_env_aware_argument(parser, *args, **kwargs):
    """Add an argument whose default may be set through the environment.

    ``store_true`` flags get :class:`EnvironmentAwareBooleanAction`; plain
    store arguments get :class:`EnvironmentAwareAction`. Other actions are
    added unchanged.
    """
    action = kwargs.get("action", "store")
    if action == "store_true":
        kwargs["action"] = EnvironmentAwareBooleanAction
    elif action in ("store", None):
        kwargs["action"] = EnvironmentAwareAction
    return parser.add_argument(*args, **kwargs)
