"""Tests for the command-line risk report."""

from __future__ import annotations

import io
import json
import unittest
from contextlib import redirect_stdout

import logging

from riskplanner.cli import EXIT_ANALYSIS_FAILED, EXIT_INVALID_PARAMETERS, main

BASE_ARGS = [
    "--entry", "50000",
    "--stop-loss", "48000",
    "--take-profit", "55000",
    "--balance", "10000",
    "--leverage", "10",
    "--risk", "1",
    "--side", "long",
    "--config", "config/does-not-exist.yaml",
]


class CliTests(unittest.TestCase):
    def test_text_report(self) -> None:
        buffer = io.StringIO()
        with redirect_stdout(buffer):
            code = main(BASE_ARGS)
        self.assertEqual(code, 0)
        output = buffer.getvalue()
        self.assertIn("Risk level:              LOW", output)
        self.assertIn("$45,025.00", output)
        self.assertIn("Your risk parameters look reasonable", output)

    def test_json_report(self) -> None:
        buffer = io.StringIO()
        with redirect_stdout(buffer):
            code = main(BASE_ARGS + ["--json"])
        self.assertEqual(code, 0)
        payload = json.loads(buffer.getvalue())
        self.assertEqual(payload["risk_level"], "LOW")
        self.assertEqual(payload["parameters"]["position_type"], "LONG")

    def test_invalid_parameters_exit_code(self) -> None:
        args = list(BASE_ARGS)
        args[args.index("--side") + 1] = "short"
        buffer = io.StringIO()
        with redirect_stdout(buffer):
            code = main(args)
        self.assertEqual(code, EXIT_INVALID_PARAMETERS)
        self.assertEqual(buffer.getvalue(), "")


    def test_overflowing_setup_exit_code(self) -> None:
        args = list(BASE_ARGS)
        for flag, value in (
            ("--entry", "2"),
            ("--stop-loss", "1"),
            ("--take-profit", "3"),
            ("--balance", "1e308"),
            ("--risk", "100"),
        ):
            args[args.index(flag) + 1] = value
        buffer = io.StringIO()
        with redirect_stdout(buffer):
            code = main(args)
        self.assertEqual(code, EXIT_ANALYSIS_FAILED)
        self.assertEqual(buffer.getvalue(), "")

    def test_log_level_flag_overrides_config(self) -> None:
        with redirect_stdout(io.StringIO()):
            main(BASE_ARGS + ["--log-level", "warning"])
        self.assertEqual(logging.getLogger("riskplanner").level, logging.WARNING)


if __name__ == "__main__":
    unittest.main()
