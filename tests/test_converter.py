from pathlib import Path

from note_outliner.converter import Converter
from note_outliner.validator import validate

SALEM = (
    "---\n"
    "name: Salem\n"
    "tags: [port, coastal]\n"
    "---\n"
    "# Overview\n"
    "Salem is a port city.\n"
    "Features:\n"
    "- Busy harbor\n"
)

SALEM_OUT = (
    "name:: Salem\n"
    "tags:: port, coastal\n"
    "\n"
    "- # Overview\n"
    "\t- [[Salem]] is a port city.\n"
    "\t- Features:\n"
    "\t\t- Busy harbor"
)


def test_convert_text_formats_then_links():
    assert Converter().convert_text(SALEM) == SALEM_OUT


def test_converted_output_validates():
    r = validate(Converter().convert_text(SALEM))
    assert r.valid
    assert r.warnings == []


def test_body_single_colon_property_survives_and_is_flagged():
    out = Converter().convert_text("# NPC\nType: NPC\n")
    assert out == "- # NPC\n\t- Type: NPC"
    assert validate("Type: NPC").errors


def test_linking_can_be_disabled():
    assert Converter(link_entities=False).convert_text("Salem") == "- Salem"


def test_convert_file_in_place(tmp_path):
    note = tmp_path / "salem.md"
    note.write_text(SALEM, encoding="utf-8")
    result = Converter().convert_file(note)
    assert result.success
    assert result.output_path == str(note)
    assert note.read_text(encoding="utf-8") == SALEM_OUT + "\n"


def test_convert_file_missing_input(tmp_path):
    result = Converter().convert_file(tmp_path / "nope.md", tmp_path / "out.md")
    assert not result.success
    assert result.error
    assert not (tmp_path / "out.md").exists()


def test_convert_directory_mirrors_tree_and_isolates_failures(tmp_path):
    src = tmp_path / "vault"
    (src / "places").mkdir(parents=True)
    (src / "places" / "salem.md").write_text(SALEM, encoding="utf-8")
    (src / "broken.md").write_bytes(b"\xff\xfe\x00bad")
    (src / "athena.md").write_text("# Athena\nA scholar.\n", encoding="utf-8")
    out = tmp_path / "out"

    results = Converter().convert_directory(src, out)

    by_name = {Path(r.file).name: r for r in results}
    assert len(results) == 3
    assert not by_name["broken.md"].success
    assert by_name["salem.md"].success
    assert (out / "places" / "salem.md").read_text(encoding="utf-8") == SALEM_OUT + "\n"
    assert (out / "athena.md").read_text(encoding="utf-8") == "- # [[Athena]]\n\t- A scholar.\n"


def test_dry_run_does_not_write(tmp_path):
    note = tmp_path / "n.md"
    note.write_text("Boston\n", encoding="utf-8")
    assert Converter().dry_run(note) == "- [[Boston]]"
    assert note.read_text(encoding="utf-8") == "Boston\n"


def test_dry_run_reports_errors(tmp_path):
    assert Converter().dry_run(tmp_path / "missing.md").startswith("Error: ")


def test_bad_front_matter_does_not_abort_directory(tmp_path):
    src = tmp_path / "vault"
    src.mkdir()
    (src / "a.md").write_text("---\ndate: 2024-02-30\n---\n# A\n", encoding="utf-8")
    (src / "b.md").write_text("# B\nBoston\n", encoding="utf-8")
    out = tmp_path / "out"

    results = Converter().convert_directory(src, out)

    assert [r.success for r in results] == [True, True]
    assert (out / "a.md").read_text(encoding="utf-8") == "- ---\n- date: 2024-02-30\n- ---\n- # A\n"
    assert (out / "b.md").read_text(encoding="utf-8") == "- # B\n\t- [[Boston]]\n"


class ExplodingLinker:
    def annotate(self, content):
        if "boom" in content:
            raise RuntimeError("linker exploded")
        return content


def test_unexpected_error_fails_only_that_document(tmp_path):
    src = tmp_path / "vault"
    src.mkdir()
    (src / "a.md").write_text("boom\n", encoding="utf-8")
    (src / "b.md").write_text("fine\n", encoding="utf-8")
    converter = Converter(linker=ExplodingLinker())

    results = converter.convert_directory(src, tmp_path / "out")

    by_name = {Path(r.file).name: r for r in results}
    assert not by_name["a.md"].success
    assert by_name["a.md"].error == "linker exploded"
    assert by_name["b.md"].success
    assert converter.dry_run(src / "a.md") == "Error: linker exploded"
