from typing import Any, Dict, Optional

from lox.errors import LoxRuntimeError


class Environment:
    """Represents a scope mapping variable names to values.

    Scopes form a chain through `parent`. Lookups and assignments walk from
    this scope outward and stop at the first scope holding the name;
    declarations always land in this scope.
    """
    def __init__(self, parent: Optional['Environment'] = None):
        self.parent = parent
        self.values: Dict[str, Any] = {}

    def child(self) -> 'Environment':
        return Environment(parent=self)

    def define(self, name: str, value: Any) -> None:
        # Redeclaration in the same scope overwrites.
        self.values[name] = value

    def get(self, name: str, line: Optional[int] = None) -> Any:
        if name in self.values:
            return self.values[name]
        if self.parent:
            return self.parent.get(name, line)
        raise LoxRuntimeError('UndefinedVariable', f"Undefined variable '{name}'.", line)

    def assign(self, name: str, value: Any, line: Optional[int] = None) -> None:
        if name in self.values:
            self.values[name] = value
            return
        if self.parent:
            self.parent.assign(name, value, line)
            return
        raise LoxRuntimeError('UndefinedVariable', f"Undefined variable '{name}'.", line)

    def is_defined(self, name: str) -> bool:
        if name in self.values:
            return True
        return self.parent is not None and self.parent.is_defined(name)
