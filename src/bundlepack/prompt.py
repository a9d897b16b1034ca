"""
Prompt-or-default capability shared by every stage that asks the user.

The pipeline never reads input directly. It asks a Prompter for a keyed
value and a default; whether the answer comes from a terminal, a
pre-supplied answers file, or the default itself (batch mode) is the
prompter's business.

Keys used by bundlepack:
    groupId, artifactId, version
    name, description, url, license.name, license.url
    include:<file name>
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Protocol, Union, runtime_checkable

import click
import yaml

from bundlepack.errors import InputError

logger = logging.getLogger(__name__)


@runtime_checkable
class Prompter(Protocol):
    """Source of answers for interactive questions."""

    def ask(self, key: str, message: str, default: Optional[str] = None) -> str:
        """Return a line of text for ``key``."""
        ...

    def confirm(self, key: str, message: str, default: bool = True) -> bool:
        """Return a yes/no answer for ``key``."""
        ...


class ConsolePrompter:
    """
    Prompter backed by the terminal.

    In batch mode nothing is read: ``ask`` returns the default (or ``""``)
    and ``confirm`` returns its default.
    """

    def __init__(self, batch_mode: bool = False):
        self.batch_mode = batch_mode

    def ask(self, key: str, message: str, default: Optional[str] = None) -> str:
        logger.debug("Prompt %s: %s", key, message)
        if self.batch_mode:
            return default or ""
        try:
            answer = click.prompt(
                message,
                default=default or "",
                show_default=bool(default),
                prompt_suffix=": ",
            )
        except (click.Abort, EOFError, OSError) as exc:
            raise InputError(f"Unable to read {key} from input: {str(exc) or 'end of input'}") from exc
        return answer

    def confirm(self, key: str, message: str, default: bool = True) -> bool:
        logger.debug("Confirm %s: %s", key, message)
        if self.batch_mode:
            return default
        try:
            return click.confirm(message, default=default)
        except (click.Abort, EOFError, OSError) as exc:
            raise InputError(f"Unable to read {key} from input: {str(exc) or 'end of input'}") from exc


class ScriptedPrompter:
    """
    Prompter that answers from a pre-supplied mapping.

    Keys without an answer are passed to ``fallback`` when one is given,
    otherwise the default is returned. Every key asked is recorded in
    ``asked``, in order.
    """

    def __init__(
        self,
        answers: Optional[Mapping[str, Any]] = None,
        fallback: Optional[Prompter] = None,
    ):
        self.answers: Dict[str, Any] = dict(answers or {})
        self.fallback = fallback
        self.asked: List[str] = []

    @classmethod
    def from_yaml(
        cls, path: Union[str, Path], fallback: Optional[Prompter] = None
    ) -> "ScriptedPrompter":
        """
        Load answers from a YAML mapping.

        Nested mappings are flattened with dots, so ``license: {name: MIT}``
        answers ``license.name``.

        Raises:
            InputError: If the file cannot be read or is not a mapping
        """
        path = Path(path)
        try:
            # BaseLoader keeps every scalar as text, so "1.10" stays "1.10"
            data = yaml.load(path.read_text(encoding="utf-8"), Loader=yaml.BaseLoader)
        except (OSError, yaml.YAMLError) as exc:
            raise InputError(f"Unable to read answers file {path}: {exc}") from exc
        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise InputError(f"Answers file {path} must contain a mapping")
        return cls(_flatten(data), fallback=fallback)

    def ask(self, key: str, message: str, default: Optional[str] = None) -> str:
        self.asked.append(key)
        if key in self.answers:
            value = self.answers[key]
            return "" if value is None else str(value)
        if self.fallback is not None:
            return self.fallback.ask(key, message, default)
        return default or ""

    def confirm(self, key: str, message: str, default: bool = True) -> bool:
        self.asked.append(key)
        if key in self.answers:
            value = self.answers[key]
            if isinstance(value, str):
                return value.strip().lower() in ("y", "yes", "true", "1")
            return bool(value)
        if self.fallback is not None:
            return self.fallback.confirm(key, message, default)
        return default

    def asked_count(self, key: str) -> int:
        return self.asked.count(key)


def _flatten(data: Mapping[str, Any], prefix: str = "") -> Dict[str, Any]:
    flat: Dict[str, Any] = {}
    for key, value in data.items():
        name = f"{prefix}{key}"
        if isinstance(value, Mapping):
            flat.update(_flatten(value, prefix=f"{name}."))
        else:
            flat[name] = value
    return flat
