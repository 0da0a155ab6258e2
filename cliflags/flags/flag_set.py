"""Flag registration on top of argparse with explicit-set tracking."""

import argparse
from typing import Any, Callable, Sequence

TRUE_VALUES = {"1", "t", "true", "yes", "on"}
FALSE_VALUES = {"0", "f", "false", "no", "off"}


def parse_bool(value: str) -> bool:
    """Parse a boolean flag value such as ``--tls=false``."""
    lowered = value.strip().lower()
    if lowered in TRUE_VALUES:
        return True
    if lowered in FALSE_VALUES:
        return False
    raise argparse.ArgumentTypeError(f"invalid boolean value: {value!r}")


def _flag_key(name: str) -> str:
    return name.lstrip("-").replace("-", "_")


def _copy_value(value: Any) -> Any:
    # List defaults are shared with the parser; hand out copies.
    if isinstance(value, list):
        return list(value)
    return value


class _TrackedAction(argparse.Action):
    """Base action that records which destinations came from argv."""

    def __init__(self, option_strings, dest, recorder: set[str], **kwargs):
        super().__init__(option_strings, dest, **kwargs)
        self._recorder = recorder

    def __call__(self, parser, namespace, values, option_string=None):
        self._recorder.add(self.dest)
        self.store(namespace, values)

    def store(self, namespace: argparse.Namespace, values: Any) -> None:
        raise NotImplementedError


class _StoreAction(_TrackedAction):
    def store(self, namespace: argparse.Namespace, values: Any) -> None:
        setattr(namespace, self.dest, values)


class _AppendAction(_TrackedAction):
    def store(self, namespace: argparse.Namespace, values: Any) -> None:
        items = list(getattr(namespace, self.dest, None) or [])
        items.append(values)
        setattr(namespace, self.dest, items)


class FlagSet:
    """A set of command-line flags bound to attributes of target objects.

    Each ``*_var`` call writes the default into ``target.attr`` right away
    and copies the parsed value back after ``parse``. ``is_set`` answers
    whether a flag was given on the command line during the last parse,
    as opposed to being left at its default.
    """

    def __init__(self):
        self.parser = argparse.ArgumentParser(allow_abbrev=False)
        self._explicit: set[str] = set()
        self._bool_options: set[str] = set()
        self._bindings: list[tuple[object, str, str]] = []

    def _bind(self, target: object, attr: str, action: argparse.Action) -> None:
        setattr(target, attr, _copy_value(action.default))
        self._bindings.append((target, attr, action.dest))

    def bool_var(
        self,
        target: object,
        attr: str,
        names: Sequence[str],
        default: bool,
        usage: str,
    ) -> None:
        """Register a boolean flag accepting ``--flag`` or ``--flag=value``.

        A bare flag never takes the following word as its value.
        """
        action = self.parser.add_argument(
            *names,
            action=_StoreAction,
            recorder=self._explicit,
            nargs="?",
            const=True,
            default=default,
            type=parse_bool,
            metavar="BOOL",
            help=usage,
        )
        self._bool_options.update(action.option_strings)
        self._bind(target, attr, action)

    def string_var(
        self,
        target: object,
        attr: str,
        names: Sequence[str],
        default: str,
        usage: str,
    ) -> None:
        """Register a string flag."""
        action = self.parser.add_argument(
            *names,
            action=_StoreAction,
            recorder=self._explicit,
            default=default,
            help=usage,
        )
        self._bind(target, attr, action)

    def list_var(
        self,
        target: object,
        attr: str,
        names: Sequence[str],
        validator: Callable[[str], str],
        usage: str,
    ) -> None:
        """Register a repeatable flag whose values are checked by ``validator``."""
        action = self.parser.add_argument(
            *names,
            action=_AppendAction,
            recorder=self._explicit,
            default=[],
            type=validator,
            help=usage,
        )
        self._bind(target, attr, action)

    def _with_bool_values(self, argv: Sequence[str]) -> list[str]:
        # Bare booleans become --flag=true so argparse only reads an inline
        # value. Everything after "--" is left alone.
        args = list(argv)
        for index, arg in enumerate(args):
            if arg == "--":
                break
            if arg in self._bool_options:
                args[index] = f"{arg}=true"
        return args

    def parse(self, argv: Sequence[str]) -> argparse.Namespace:
        """Parse ``argv`` and copy the values onto the bound targets."""
        self._explicit.clear()
        namespace = self.parser.parse_args(self._with_bool_values(argv))
        for target, attr, dest in self._bindings:
            setattr(target, attr, _copy_value(getattr(namespace, dest)))
        return namespace

    def is_set(self, name: str) -> bool:
        """Return True when ``name`` was given on the last parsed command line."""
        return _flag_key(name) in self._explicit
