import tempfile
import unittest
from pathlib import Path

import yaml

from dtogen.errors import EmptyCustomTypeError, OverrideFileError
from dtogen.extract import extract_schema
from dtogen.models import FieldDescriptor, FieldOverride
from dtogen.overrides import (
    FieldEdit,
    apply_edit,
    dump_overrides,
    edit_from_entry,
    initialise_overrides,
    load_override_file,
    parse_override_document,
)

from samples import SAMPLE_BODY


class InitialiseOverridesTests(unittest.TestCase):
    def test_defaults_mirror_inferred_types(self) -> None:
        overrides = initialise_overrides(extract_schema(SAMPLE_BODY, "DemoTranrq"))
        self.assertEqual(
            overrides["DemoTranrq.caseList"],
            FieldOverride(name="caseList", type="List<DemoTranrqCase>"),
        )
        age = overrides["DemoTranrqCaseFlowsBasicInfo.age"]
        self.assertEqual(age.type, "Integer")
        self.assertFalse(age.has_constraint())

    def test_existing_overrides_are_kept(self) -> None:
        schema = {"Root": [FieldDescriptor("id", "Integer")]}
        existing = {"Root.id": FieldOverride(name="id", type="Long", required=True)}
        overrides = initialise_overrides(schema, existing)
        self.assertIs(overrides, existing)
        self.assertEqual(overrides["Root.id"].type, "Long")


class ApplyEditTests(unittest.TestCase):
    def test_non_standard_type_is_treated_as_custom(self) -> None:
        override = FieldOverride(name="items", type="List<String>")
        updated = apply_edit(override, FieldEdit(type="ItemDto"))
        self.assertEqual((updated.type, updated.custom_type), ("List<ItemDto>", "ItemDto"))
        self.assertEqual(override.type, "List<String>")

    def test_empty_type_selection(self) -> None:
        with self.assertRaises(EmptyCustomTypeError):
            apply_edit(FieldOverride(name="a", type="String"), FieldEdit(type=""))


class OverrideFileTests(unittest.TestCase):
    def test_parse_valid_document(self) -> None:
        entries = parse_override_document(
            """
fields:
  DemoTranrqCaseFlowsBasicInfo.age:
    required: true
    max_length: 4
  DemoTranrqCase.caseId:
    json_alias: [case_id, CASE_ID]
    comment: 案件編號
"""
        )
        self.assertEqual(entries["DemoTranrqCaseFlowsBasicInfo.age"], {"required": True, "max_length": 4})

        current = FieldOverride(name="caseId", type="String")
        edit = edit_from_entry(current, entries["DemoTranrqCase.caseId"])
        self.assertEqual(edit.json_alias, "case_id, CASE_ID")
        self.assertEqual(edit.type, "String")
        self.assertEqual(edit.comment, "案件編號")

        age = edit_from_entry(FieldOverride(name="age", type="Integer"), entries["DemoTranrqCaseFlowsBasicInfo.age"])
        self.assertEqual(age.max_length, "4")
        self.assertTrue(age.required)

    def test_custom_type_alone_selects_others(self) -> None:
        entries = parse_override_document("fields:\n  DemoTranrqCase.caseId:\n    custom_type: CaseIdDto\n")
        current = FieldOverride(name="caseId", type="String")
        edit = edit_from_entry(current, entries["DemoTranrqCase.caseId"])
        self.assertEqual((edit.type, edit.custom_type), ("Others", "CaseIdDto"))

        updated = apply_edit(current, edit)
        self.assertEqual((updated.type, updated.custom_type), ("CaseIdDto", "CaseIdDto"))

        blank = edit_from_entry(current, {"custom_type": "  "})
        self.assertEqual(blank.type, "String")

    def test_rejects_custom_type_with_standard_type(self) -> None:
        with self.assertRaises(OverrideFileError):
            parse_override_document(
                "fields:\n  Root.id:\n    type: String\n    custom_type: IdDto\n"
            )
        entries = parse_override_document(
            "fields:\n  Root.id:\n    type: String\n    custom_type: ''\n"
            "  Root.ref:\n    type: Others\n    custom_type: RefDto\n"
        )
        self.assertEqual(entries["Root.ref"], {"type": "Others", "custom_type": "RefDto"})

    def test_empty_document(self) -> None:
        self.assertEqual(parse_override_document(""), {})

    def test_rejects_unknown_keys(self) -> None:
        with self.assertRaises(OverrideFileError) as ctx:
            parse_override_document("fields:\n  Root.id:\n    nullable: true\n")
        self.assertIn("Root.id", str(ctx.exception))

    def test_rejects_malformed_paths_and_yaml(self) -> None:
        with self.assertRaises(OverrideFileError):
            parse_override_document("fields:\n  justAName:\n    required: true\n")
        with self.assertRaises(OverrideFileError):
            parse_override_document("fields: [unclosed")

    def test_dump_then_load(self) -> None:
        overrides = initialise_overrides(extract_schema(SAMPLE_BODY, "DemoTranrq"))
        text = dump_overrides(overrides)
        data = yaml.safe_load(text)
        self.assertEqual(data["fields"]["DemoTranrqCase.flows"]["type"], "Others")
        self.assertEqual(data["fields"]["DemoTranrqCase.flows"]["custom_type"], "DemoTranrqCaseFlows")

        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "overrides.yaml"
            path.write_text(text, encoding="utf-8")
            entries = load_override_file(path)
        self.assertEqual(list(entries), list(overrides))

    def test_missing_file(self) -> None:
        with self.assertRaises(OverrideFileError):
            load_override_file(Path(tempfile.gettempdir()) / "does-not-exist-overrides.yaml")


if __name__ == "__main__":
    unittest.main()
