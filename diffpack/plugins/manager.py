"""Hook dispatch with per-plugin fault isolation."""

from __future__ import annotations

from dataclasses import dataclass, field
import warnings

from diffpack.plugins.base import DiffEndEvent, DiffStartEvent


@dataclass(frozen=True, slots=True)
class PluginDiagnostic:
    plugin_name: str
    hook: str
    error_type: str
    message: str

    def to_dict(self) -> dict[str, str]:
        return {
            "plugin_name": self.plugin_name,
            "hook": self.hook,
            "error_type": self.error_type,
            "message": self.message,
        }


@dataclass(slots=True)
class PluginManager:
    """Runs lifecycle hooks; a failing plugin never fails the diff."""

    plugins: tuple[object, ...] = ()
    diagnostics: list[PluginDiagnostic] = field(default_factory=list)

    @property
    def enabled(self) -> bool:
        return bool(self.plugins)

    def clear_diagnostics(self) -> None:
        self.diagnostics.clear()

    def on_diff_start(self, event: DiffStartEvent) -> None:
        self._dispatch("on_diff_start", event)

    def on_diff_end(self, event: DiffEndEvent) -> None:
        self._dispatch("on_diff_end", event)

    def _dispatch(self, hook: str, event: object) -> None:
        for plugin in self.plugins:
            callback = getattr(plugin, hook, None)
            if callback is None:
                continue
            try:
                callback(event)
            except Exception as error:
                self._record_failure(plugin, hook, error)

    def _record_failure(self, plugin: object, hook: str, error: Exception) -> None:
        diagnostic = PluginDiagnostic(
            plugin_name=str(getattr(plugin, "name", plugin.__class__.__name__)),
            hook=hook,
            error_type=error.__class__.__name__,
            message=str(error),
        )
        self.diagnostics.append(diagnostic)
        warnings.warn(
            (
                f"DiffKit plugin failure: plugin={diagnostic.plugin_name} "
                f"hook={diagnostic.hook} "
                f"error={diagnostic.error_type}: {diagnostic.message}"
            ),
            RuntimeWarning,
            stacklevel=3,
        )
