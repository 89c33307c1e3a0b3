import json
import os
import sqlite3
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from notestore import __main__ as cli
from notestore.api import STORE_KEY
from notestore.db import DocumentStore


class CliTests(unittest.TestCase):
    def setUp(self):
        self.temp_dir = tempfile.TemporaryDirectory()
        self.db_path = str(Path(self.temp_dir.name) / "pulm_notes.db")

    def tearDown(self):
        self.temp_dir.cleanup()

    def test_newer_schema_aborts_startup(self):
        conn = sqlite3.connect(self.db_path)
        conn.execute("PRAGMA user_version = 99")
        conn.close()

        with mock.patch.object(cli.web, "run_app") as run_app:
            with self.assertLogs("NoteStore", level="ERROR") as logs:
                code = cli.main(["--db", self.db_path])

        self.assertEqual(code, 1)
        run_app.assert_not_called()
        self.assertTrue(any("failed to start" in line for line in logs.output))

    def test_log_level_is_case_insensitive(self):
        with mock.patch.object(cli.web, "run_app") as run_app, mock.patch.object(cli.logging, "basicConfig") as basic:
            code = cli.main(["--db", self.db_path, "--log-level", "debug"])

        self.assertEqual(code, 0)
        self.assertEqual(basic.call_args.kwargs["level"], "DEBUG")
        run_app.call_args.args[0][STORE_KEY].close()

    def test_invalid_log_level_flag_is_rejected(self):
        with mock.patch.object(cli.web, "run_app") as run_app, mock.patch("sys.stderr"):
            with self.assertRaises(SystemExit) as ctx:
                cli.main(["--db", self.db_path, "--log-level", "LOUD"])

        self.assertEqual(ctx.exception.code, 2)
        run_app.assert_not_called()

    def test_invalid_log_level_env_is_rejected(self):
        with mock.patch.dict(os.environ, {"NOTESTORE_LOG_LEVEL": "verbose"}):
            with mock.patch.object(cli.web, "run_app") as run_app, mock.patch("sys.stderr"):
                with self.assertRaises(SystemExit) as ctx:
                    cli.main(["--db", self.db_path])

        self.assertEqual(ctx.exception.code, 2)
        run_app.assert_not_called()

    def test_serves_app_and_imports_legacy_file(self):
        legacy_path = Path(self.temp_dir.name) / "legacy.json"
        legacy_path.write_text(json.dumps({"pulm-notes": '["from legacy"]'}), encoding="utf-8")

        with mock.patch.object(cli.web, "run_app") as run_app:
            code = cli.main(["--db", self.db_path, "--port", "9999", "--import-legacy", str(legacy_path)])

        self.assertEqual(code, 0)
        run_app.assert_called_once()
        self.assertEqual(run_app.call_args.kwargs["port"], 9999)
        app = run_app.call_args.args[0]
        store = app[STORE_KEY]
        store.close()

        reopened = DocumentStore(self.db_path)
        try:
            self.assertEqual(reopened.load_notes(), '["from legacy"]')
        finally:
            reopened.close()


if __name__ == "__main__":
    unittest.main()
