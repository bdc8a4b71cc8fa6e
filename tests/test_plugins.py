import json
from pathlib import Path

import pytest

from diffpack.diff import DiffConfig, DiffLimitExceededError, diff_sequence, diff_text
from diffpack.plugins import (
    PLUGIN_CONFIG_ENV_VAR,
    DiffTracePlugin,
    LifecyclePlugin,
    PluginConfigError,
    PluginLoadError,
    PluginManager,
    build_plugin_manager,
    load_plugin_manager_from_file,
    reset_plugin_runtime_cache,
    use_plugin_manager,
    use_plugins_from_config,
)


def _write_plugin_config(path: Path, *, output_path: Path, config_version: int = 1) -> Path:
    path.write_text(
        json.dumps(
            {
                "config_version": config_version,
                "plugins": [
                    {
                        "entrypoint": "diffpack.plugins.reference:DiffTracePlugin",
                        "options": {"output_path": str(output_path)},
                    }
                ],
            }
        ),
        encoding="utf-8",
    )
    return path


def _read_hook_trace(trace_path: Path) -> list[dict]:
    return [
        json.loads(line)
        for line in trace_path.read_text(encoding="utf-8").splitlines()
        if line.strip()
    ]


def test_reference_plugin_hooks_run_end_to_end(tmp_path: Path) -> None:
    trace_path = tmp_path / "lifecycle.ndjson"
    config_path = _write_plugin_config(tmp_path / "plugins.json", output_path=trace_path)
    manager = load_plugin_manager_from_file(config_path)

    with use_plugin_manager(manager):
        diff_sequence([1, 2, 3], [1, 3])
        diff_text("foo\nbar", "foo\nbaz")

    records = _read_hook_trace(trace_path)
    hooks = [record["hook"] for record in records]

    assert hooks == ["on_diff_start", "on_diff_end", "on_diff_start", "on_diff_end"]
    assert {record["plugin"] for record in records} == {"diff-trace"}
    assert manager.diagnostics == []

    sequence_start, sequence_end, text_start, text_end = (record["event"] for record in records)
    assert sequence_start["mode"] == "sequence"
    assert sequence_start["left_length"] == 3
    assert sequence_start["right_length"] == 2
    assert sequence_start["word_diff"] is None
    assert sequence_end["status"] == "ok"
    assert sequence_end["edit_distance"] == 1
    assert sequence_end["summary"] == {"kept": 2, "inserted": 0, "removed": 1}
    assert text_start["mode"] == "text"
    assert text_start["word_diff"] is True
    assert text_end["status"] == "ok"
    assert text_end["edit_distance"] == 2


def test_failed_diff_reports_error_event(tmp_path: Path) -> None:
    trace_path = tmp_path / "errors.ndjson"
    plugin = DiffTracePlugin(output_path=str(trace_path))

    with use_plugin_manager(PluginManager(plugins=(plugin,))):
        with pytest.raises(DiffLimitExceededError):
            diff_sequence("abcd", "wxyz", config=DiffConfig(max_edit_distance=1))

    records = _read_hook_trace(trace_path)
    end = records[-1]
    assert end["hook"] == "on_diff_end"
    assert end["event"]["status"] == "error"
    assert end["event"]["error_type"] == "DiffLimitExceededError"
    assert "max_edit_distance=1" in end["event"]["error_message"]
    assert records[0]["event"]["max_edit_distance"] == 1


def test_plugin_failure_is_isolated_with_diagnostics() -> None:
    class ExplodingPlugin(LifecyclePlugin):
        name = "exploding"

        def on_diff_start(self, _event) -> None:
            raise RuntimeError("boom-from-plugin")

    manager = PluginManager(plugins=(ExplodingPlugin(),))

    with use_plugin_manager(manager):
        with pytest.warns(RuntimeWarning, match="DiffKit plugin failure"):
            ops = diff_sequence([1, 2], [1, 2])

    assert [op.kind for op in ops] == ["kept", "kept"]
    assert len(manager.diagnostics) == 1
    diagnostic = manager.diagnostics[0]
    assert diagnostic.plugin_name == "exploding"
    assert diagnostic.hook == "on_diff_start"
    assert diagnostic.error_type == "RuntimeError"
    assert "boom-from-plugin" in diagnostic.message

    manager.clear_diagnostics()
    assert manager.diagnostics == []


def test_plugins_without_a_hook_are_skipped() -> None:
    class EndOnly:
        name = "end-only"

        def __init__(self) -> None:
            self.events: list[object] = []

        def on_diff_end(self, event) -> None:
            self.events.append(event)

    plugin = EndOnly()
    with use_plugin_manager(PluginManager(plugins=(plugin,))):
        diff_sequence("ab", "ac")

    assert len(plugin.events) == 1
    assert plugin.events[0].status == "ok"


def test_load_plugin_manager_rejects_unsupported_config_version(tmp_path: Path) -> None:
    config_path = _write_plugin_config(
        tmp_path / "plugins-invalid.json",
        output_path=tmp_path / "unused.ndjson",
        config_version=99,
    )
    with pytest.raises(PluginConfigError, match="Unsupported plugin config version"):
        load_plugin_manager_from_file(config_path)


def test_load_plugin_manager_rejects_invalid_json(tmp_path: Path) -> None:
    config_path = tmp_path / "broken.json"
    config_path.write_text("{not json", encoding="utf-8")

    with pytest.raises(PluginConfigError, match="Invalid plugin config JSON"):
        load_plugin_manager_from_file(config_path)


@pytest.mark.parametrize(
    ("entry", "message"),
    [
        ("not-an-object", "must be a JSON object"),
        ({"entrypoint": "no_colon"}, "must be 'module:attribute'"),
        ({"entrypoint": "a:b", "extra": 1}, "unsupported keys: extra"),
        ({"entrypoint": "a:b", "enabled": "yes"}, "'enabled' must be boolean"),
        ({"entrypoint": "a:b", "options": []}, "'options' must be a JSON object"),
    ],
)
def test_plugin_entries_are_validated(entry: object, message: str) -> None:
    with pytest.raises(PluginConfigError, match=message):
        build_plugin_manager({"config_version": 1, "plugins": [entry]})


def test_disabled_entries_are_not_imported() -> None:
    manager = build_plugin_manager(
        {
            "config_version": 1,
            "plugins": [{"entrypoint": "missing.module:Plugin", "enabled": False}],
        }
    )

    assert manager.enabled is False


def test_plugin_load_errors_name_the_entry() -> None:
    with pytest.raises(PluginLoadError, match="failed to import module 'missing_plugin_module'"):
        build_plugin_manager(
            {"config_version": 1, "plugins": [{"entrypoint": "missing_plugin_module:Plugin"}]}
        )

    with pytest.raises(PluginLoadError, match="could not find attribute 'Nope'"):
        build_plugin_manager(
            {"config_version": 1, "plugins": [{"entrypoint": "diffpack.plugins.reference:Nope"}]}
        )


def test_plugin_api_major_version_must_match(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(DiffTracePlugin, "api_version", "2.0", raising=False)

    with pytest.raises(PluginLoadError, match="unsupported api_version '2.0'"):
        build_plugin_manager(
            {
                "config_version": 1,
                "plugins": [{"entrypoint": "diffpack.plugins.reference:DiffTracePlugin"}],
            }
        )


def test_use_plugins_from_config_scopes_the_manager(tmp_path: Path) -> None:
    trace_path = tmp_path / "scoped.ndjson"
    config_path = _write_plugin_config(tmp_path / "plugins.json", output_path=trace_path)

    with use_plugins_from_config(config_path) as manager:
        assert manager.enabled is True
        diff_sequence([1], [2])
    diff_sequence([1], [2])

    assert len(_read_hook_trace(trace_path)) == 2


def test_env_plugin_config_auto_activation(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    trace_path = tmp_path / "env-trace.ndjson"
    config_path = _write_plugin_config(tmp_path / "plugins-env.json", output_path=trace_path)
    monkeypatch.setenv(PLUGIN_CONFIG_ENV_VAR, str(config_path))
    reset_plugin_runtime_cache()

    diff_text("a", "b")
    records = _read_hook_trace(trace_path)

    assert [record["hook"] for record in records] == ["on_diff_start", "on_diff_end"]

    reset_plugin_runtime_cache()


def test_empty_manager_skips_event_dispatch(monkeypatch: pytest.MonkeyPatch) -> None:
    def _fail(self, event) -> None:
        raise AssertionError(f"unexpected dispatch: {event}")

    monkeypatch.setattr(PluginManager, "on_diff_start", _fail)
    monkeypatch.setattr(PluginManager, "on_diff_end", _fail)

    with use_plugin_manager(PluginManager(plugins=())) as manager:
        ops = diff_text("a", "b")

    assert manager.enabled is False
    assert [op.kind for op in ops] == ["removed", "inserted"]
