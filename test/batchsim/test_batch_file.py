"""Tests for the sample batch and batch file loading."""

from __future__ import annotations

import json

import pytest

from comptest.exceptions import ConfigurationError
from batchsim.core.batch import load_batch_file, sample_batch
from batchsim.core.models import ComponentKind


def _write(tmp_path, payload) -> str:
    path = tmp_path / "batch.json"
    path.write_text(payload if isinstance(payload, str) else json.dumps(payload), encoding="utf-8")
    return str(path)


class TestSampleBatch:
    def test_contents(self):
        batch = sample_batch()
        assert [(c.kind, c.nominal_value, c.tolerance) for c in batch] == [
            (ComponentKind.RESISTOR, 100, 0.05),
            (ComponentKind.CAPACITOR, 10e-6, 0.1),
            (ComponentKind.INDUCTOR, 1e-3, 0.05),
            (ComponentKind.TRANSISTOR, 50, 0.1),
        ]
        assert all(c.actual_value is None for c in batch)


class TestLoadBatchFile:
    def test_loads_components_in_order(self, tmp_path):
        path = _write(
            tmp_path,
            {
                "components": [
                    {"kind": "Inductor", "nominal": 0.001, "tolerance": 0.05},
                    {"kind": "resistor", "nominal": 220, "tolerance": 0.01},
                ]
            },
        )
        batch = load_batch_file(path)

        assert [c.kind for c in batch] == [ComponentKind.INDUCTOR, ComponentKind.RESISTOR]
        assert batch[1].nominal_value == 220

    def test_count_repeats_entry(self, tmp_path):
        path = _write(
            tmp_path,
            {
                "components": [
                    {"kind": "Capacitor", "nominal": 1e-6, "tolerance": 0.2, "count": 3},
                    {"kind": "Transistor", "nominal": 100, "tolerance": 0.1, "count": 0},
                ]
            },
        )
        batch = load_batch_file(path)
        assert len(batch) == 3
        assert {c.kind for c in batch} == {ComponentKind.CAPACITOR}

    def test_empty_components_list_allowed(self, tmp_path):
        assert load_batch_file(_write(tmp_path, {"components": []})) == []

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigurationError) as exc_info:
            load_batch_file(str(tmp_path / "nope.json"))
        assert exc_info.value.code == "BATCH_FILE_NOT_FOUND"

    def test_invalid_utf8(self, tmp_path):
        path = tmp_path / "batch.json"
        path.write_bytes(b'{"components": [{"kind": "Resistor\xff", "nominal": 100, "tolerance": 0.05}]}')
        with pytest.raises(ConfigurationError) as exc_info:
            load_batch_file(str(path))
        assert exc_info.value.code == "INVALID_BATCH_FILE"

    def test_directory_path(self, tmp_path):
        with pytest.raises(ConfigurationError) as exc_info:
            load_batch_file(str(tmp_path))
        assert exc_info.value.code == "INVALID_BATCH_FILE"

    def test_invalid_json(self, tmp_path):
        with pytest.raises(ConfigurationError) as exc_info:
            load_batch_file(_write(tmp_path, "{not json"))
        assert exc_info.value.code == "INVALID_BATCH_FILE"

    @pytest.mark.parametrize(
        "payload",
        [
            [],
            {"parts": []},
            {"components": {}},
            {"components": ["Resistor"]},
            {"components": [{"kind": "Resistor", "nominal": 100}]},
            {"components": [{"kind": "Resistor", "nominal": 100, "tolerance": 0.05, "count": -1}]},
            {"components": [{"kind": "Resistor", "nominal": 100, "tolerance": 0.05, "count": True}]},
        ],
    )
    def test_malformed_batch(self, tmp_path, payload):
        with pytest.raises(ConfigurationError) as exc_info:
            load_batch_file(_write(tmp_path, payload))
        assert exc_info.value.code == "INVALID_BATCH_FILE"

    def test_invalid_component_parameters(self, tmp_path):
        path = _write(tmp_path, {"components": [{"kind": "Resistor", "nominal": 100, "tolerance": -0.05}]})
        with pytest.raises(ConfigurationError) as exc_info:
            load_batch_file(path)
        assert exc_info.value.code == "INVALID_TOLERANCE"

    def test_unknown_kind(self, tmp_path):
        path = _write(tmp_path, {"components": [{"kind": "Diode", "nominal": 0.7, "tolerance": 0.1}]})
        with pytest.raises(ConfigurationError) as exc_info:
            load_batch_file(path)
        assert exc_info.value.code == "INVALID_KIND"
