"""
Tests for the analyze_surveys command-line script.
"""

import json
import sys

import pytest
from loguru import logger

from analyze_surveys import EXIT_FAILURE, EXIT_NO_SURVEY, EXIT_OK, main


@pytest.fixture(autouse=True)
def restore_logger(clean_env):
    """main() replaces the loguru sinks; put a plain stderr sink back afterwards."""
    yield
    logger.remove()
    logger.add(sys.stderr)


class TestCohortReport:

    def test_text_report(self, dataset_file, capsys):
        assert main([str(dataset_file)]) == EXIT_OK

        out = capsys.readouterr().out
        assert "# Survey Summary Report" in out
        assert "- Total surveys: 2" in out
        assert "## Diagnosis Groups" in out
        assert "- Hernia Inguinal: 2" in out
        assert "## Priority Surveys" in out

    def test_json_report(self, dataset_file, capsys):
        assert main([str(dataset_file), "--json"]) == EXIT_OK

        data = json.loads(capsys.readouterr().out)
        assert data["total_surveys"] == 2
        assert data["group_counts"]["Hernia Inguinal"] == 2
        assert data["top_symptoms"][0]["symptom"] == "visible_lump"


class TestPatientReport:

    def test_text_report(self, dataset_file, capsys):
        assert main([str(dataset_file), "--patient-id", "p-001"]) == EXIT_OK

        out = capsys.readouterr().out
        assert "PATIENT p-001 (survey s-001)" in out
        assert "Survey answers:" in out
        assert "Probable diagnosis:  Hernia Inguinal" in out
        assert "Comment readiness: high" in out

    def test_json_report(self, dataset_file, capsys):
        assert main([str(dataset_file), "--patient-id", "pac-12", "--json"]) == EXIT_OK

        data = json.loads(capsys.readouterr().out)
        assert data["patient_id"] == "pac-12"
        assert data["survey_id"] == "enc-12"
        assert data["probable_diagnosis"] == "Hernia Inguinal"

    def test_patient_without_survey(self, dataset_file, capsys):
        assert main([str(dataset_file), "--patient-id", "p-003"]) == EXIT_NO_SURVEY
        assert capsys.readouterr().out == ""

    def test_unknown_patient(self, dataset_file):
        assert main([str(dataset_file), "--patient-id", "nobody"]) == EXIT_FAILURE


class TestFailures:

    def test_missing_file(self, tmp_path):
        assert main([str(tmp_path / "missing.json")]) == EXIT_FAILURE

    def test_non_utf8_file(self, tmp_path):
        path = tmp_path / "latin1.json"
        path.write_bytes('[{"nombre": "José", "edad": 40}]'.encode("latin-1"))
        assert main([str(path)]) == EXIT_FAILURE

    def test_invalid_env_setting(self, dataset_file, clean_env):
        clean_env.setenv("ANALYZER_TOP_SYMPTOM_LIMIT", "many")
        assert main([str(dataset_file)]) == EXIT_FAILURE
