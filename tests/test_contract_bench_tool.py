from __future__ import annotations

import json
import subprocess
import sys
import unittest
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]


class TestBenchToolContract(unittest.TestCase):
    def test_help_runs(self):
        cmd = [sys.executable, "-m", "daylane.tools.bench", "--help"]
        p = subprocess.run(cmd, cwd=str(REPO_ROOT), capture_output=True, text=True)
        self.assertEqual(p.returncode, 0, (p.stdout or "") + "\n" + (p.stderr or ""))

    def test_small_bench_reports_json(self):
        cmd = [sys.executable, "-m", "daylane.tools.bench", "--n", "200", "--repeats", "1", "--warmup", "0"]
        p = subprocess.run(cmd, cwd=str(REPO_ROOT), capture_output=True, text=True)
        combined = (p.stdout or "") + "\n" + (p.stderr or "")
        self.assertEqual(p.returncode, 0, combined)

        report = json.loads(p.stdout)
        self.assertEqual(report["n"], 200)
        self.assertLessEqual(report["blocks"] + report["early"] + report["late"], 200)
        self.assertGreater(report["blocks"], 0)
        self.assertIn("avg", report["layout_ms"])

    def test_unknown_preset_fails(self):
        cmd = [sys.executable, "-m", "daylane.tools.bench", "--n", "5", "--preset", "watch"]
        p = subprocess.run(cmd, cwd=str(REPO_ROOT), capture_output=True, text=True)
        self.assertEqual(p.returncode, 2)
        self.assertIn("[daylane-bench] ERROR:", p.stderr)


if __name__ == "__main__":
    unittest.main(verbosity=2)
