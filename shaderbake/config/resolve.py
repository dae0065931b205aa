"""
resolve substitutes `${var}` placeholders in manifest payloads.

Variables come from the manifest's top-level `vars` section and may refer to
each other. A value that is exactly one placeholder takes the variable's value
with its type intact, so a list variable can stand in for a whole directive
list. Inside a longer string a list variable is joined with ", ", which
splices it into a directive string:

    vars:
      common: [vulkan1_1, 'I "shaders/include"']
    shaders:
      - name: blit
        directives: "vert, ${common}"    # vert, vulkan1_1, I "shaders/include"

`$${` writes a literal `${`.
"""
from __future__ import annotations

import re
from collections.abc import Mapping

from shaderbake.errors import ManifestVariableError

KeyPath = tuple[str | int, ...]

_PLACEHOLDER = re.compile(r"\$(\$?)\{([A-Za-z_][A-Za-z0-9_]*)\}")


def format_key_path(path: KeyPath) -> str:
    """Render a payload location the way it reads in the manifest."""
    out = ""
    for part in path:
        if isinstance(part, int):
            out += f"[{part}]"
        else:
            out += f".{part}" if out else part
    return out or "<manifest>"


class ManifestVars:
    """
    ManifestVars expands `${name}` placeholders from a `vars` section.

    Each variable is expanded once, on first use.
    """

    def __init__(self, vars: Mapping[str, object]) -> None:
        self._vars: dict[str, object] = dict(vars)
        self._expanded: dict[str, object] = {}
        self._stack: list[str] = []

    def substitute(self, payload: object, path: KeyPath = ()) -> object:
        """Return `payload` with every placeholder replaced.

        Args:
            payload: A decoded YAML/JSON node.
            path: Where `payload` sits in the manifest, for error messages.

        Raises:
            ManifestVariableError: On an unknown variable, a cycle between
                variables, or a mapping spliced into text.
        """
        match payload:
            case Mapping():
                return {
                    k: self.substitute(v, (*path, str(k))) for k, v in payload.items()
                }
            case list():
                return [self.substitute(v, (*path, i)) for i, v in enumerate(payload)]
            case str():
                return self._substitute_text(payload, path)
            case _:
                return payload

    def _substitute_text(self, text: str, path: KeyPath) -> object:
        whole = _PLACEHOLDER.fullmatch(text)
        if whole is not None and not whole.group(1):
            return self._lookup(whole.group(2), path)

        def _replace(m: re.Match[str]) -> str:
            if m.group(1):
                return "${" + m.group(2) + "}"
            return _splice(self._lookup(m.group(2), path), m.group(2), path)

        return _PLACEHOLDER.sub(_replace, text)

    def _lookup(self, name: str, path: KeyPath) -> object:
        if name in self._expanded:
            return self._expanded[name]
        where = format_key_path(path)
        if name in self._stack:
            chain = " -> ".join([*self._stack[self._stack.index(name):], name])
            raise ManifestVariableError(f"{where}: variable cycle {chain}")
        if name not in self._vars:
            known = ", ".join(sorted(self._vars)) or "none"
            raise ManifestVariableError(
                f"{where}: unknown variable '{name}' (defined: {known})"
            )

        self._stack.append(name)
        try:
            value = self.substitute(self._vars[name], ("vars", name))
        finally:
            _ = self._stack.pop()
        self._expanded[name] = value
        return value


def _splice(value: object, name: str, path: KeyPath) -> str:
    match value:
        case bool():
            return "true" if value else "false"
        case str() | int() | float():
            return str(value)
        case list() if all(isinstance(v, (str, int, float)) for v in value):
            return ", ".join(str(v) for v in value)
        case _:
            raise ManifestVariableError(
                f"{format_key_path(path)}: variable '{name}' holds "
                f"{type(value).__name__} and cannot be spliced into text"
            )
