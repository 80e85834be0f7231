import json
import tempfile
import unittest
from pathlib import Path

import yaml
from typer.testing import CliRunner

from dtogen.cli import app

from samples import SAMPLE_DOCUMENT


class CliTests(unittest.TestCase):
    def setUp(self) -> None:
        self.runner = CliRunner()
        self.tempdir = tempfile.TemporaryDirectory()
        self.addCleanup(self.tempdir.cleanup)
        self.root = Path(self.tempdir.name)
        self.source = self.root / "sample.json"
        self.source.write_text(json.dumps(SAMPLE_DOCUMENT), encoding="utf-8")

    def test_generate_writes_output(self) -> None:
        output = self.root / "out" / "Demo.java"
        result = self.runner.invoke(app, ["generate", str(self.source), "-p", "Demo", "-o", str(output)])
        self.assertEqual(result.exit_code, 0, msg=result.output)
        code = output.read_text(encoding="utf-8")
        self.assertIn("public class DemoTranrq implements Serializable", code)
        self.assertIn("private List<DemoTranrqCase> caseList;", code)

    def test_generate_applies_override_file(self) -> None:
        overrides = self.root / "overrides.yaml"
        overrides.write_text(
            yaml.safe_dump({"fields": {"DemoTranrqCaseFlowsBasicInfo.age": {"max_length": "4"}}}),
            encoding="utf-8",
        )
        output = self.root / "Demo.java"
        result = self.runner.invoke(
            app,
            [
                "generate",
                str(self.source),
                "-p",
                "Demo",
                "--java-version",
                "8",
                "--overrides",
                str(overrides),
                "-o",
                str(output),
            ],
        )
        self.assertEqual(result.exit_code, 0, msg=result.output)
        code = output.read_text(encoding="utf-8")
        self.assertIn("value = 9999", code)
        self.assertIn("import javax.validation.Valid;", code)

    def test_missing_root_key_exits_with_error(self) -> None:
        self.source.write_text(json.dumps({"BODY": {}}), encoding="utf-8")
        result = self.runner.invoke(app, ["generate", str(self.source), "-p", "Demo"])
        self.assertEqual(result.exit_code, 1)
        self.assertIn("Error generating DTO classes", result.output)

    def test_blank_program_name_exits_with_error(self) -> None:
        result = self.runner.invoke(app, ["generate", str(self.source), "-p", " "])
        self.assertEqual(result.exit_code, 1)
        self.assertIn("Program name is required", result.output)

    def test_unsupported_java_version(self) -> None:
        result = self.runner.invoke(
            app, ["generate", str(self.source), "-p", "Demo", "--java-version", "11"]
        )
        self.assertEqual(result.exit_code, 1)
        self.assertIn("Error generating DTO classes", result.output)

    def test_init_overrides_writes_defaults(self) -> None:
        destination = self.root / "overrides.yaml"
        result = self.runner.invoke(
            app, ["init-overrides", str(self.source), "-p", "Demo", "-o", str(destination)]
        )
        self.assertEqual(result.exit_code, 0, msg=result.output)
        data = yaml.safe_load(destination.read_text(encoding="utf-8"))
        self.assertEqual(data["fields"]["DemoTranrqCaseFlowsBasicInfo.age"]["type"], "Integer")
        self.assertIs(data["fields"]["DemoTranrqCaseFlowsBasicInfo.age"]["required"], False)

    def test_structure_lists_fields(self) -> None:
        result = self.runner.invoke(app, ["structure", str(self.source), "-p", "Demo"])
        self.assertEqual(result.exit_code, 0, msg=result.output)
        self.assertIn("caseList", result.output)
        self.assertIn("Integer", result.output)


if __name__ == "__main__":
    unittest.main()
