from note_outliner.formatter import HierarchyFormatter, format_for_outliner
from note_outliner.frontmatter import extract_front_matter, format_property
from note_outliner.ir import FoldState, LineKind


def fmt(text):
    return format_for_outliner(text)


def test_salem_scenario():
    src = (
        "---\n"
        "name: Salem\n"
        "tags: [port, coastal]\n"
        "---\n"
        "# Overview\n"
        "Salem is a port city.\n"
        "Features:\n"
        "- Busy harbor\n"
    )
    assert fmt(src) == (
        "name:: Salem\n"
        "tags:: port, coastal\n"
        "\n"
        "- # Overview\n"
        "\t- Salem is a port city.\n"
        "\t- Features:\n"
        "\t\t- Busy harbor"
    )


def test_header_interleaving():
    src = "# A\n## B\n### C\ntext c\n## D\ntext d\n# E\ntext e"
    assert fmt(src).split("\n") == [
        "- # A",
        "\t- ## B",
        "\t\t- ### C",
        "\t\t\t- text c",
        "\t- ## D",
        "\t\t- text d",
        "- # E",
        "\t- text e",
    ]


def test_skipped_level_extends_stack():
    assert fmt("# A\n### C\nbody").split("\n") == ["- # A", "\t\t- ### C", "\t\t\t- body"]


def test_fold_state_reuses_slot_for_same_level():
    state = FoldState()
    state.open_header(1)
    state.open_header(2)
    state.open_header(2)
    assert state.stack == [1, 2]
    state.open_header(4)
    assert state.stack == [1, 2, None, 4]
    state.open_header(1)
    assert state.stack == [1]


def test_list_section_flag_is_sticky_across_blanks_and_reset_by_header():
    src = "# Place\nHooks:\n- one\n\n- two\nstray line\n## Next\n- three"
    assert fmt(src).split("\n") == [
        "- # Place",
        "\t- Hooks:",
        "\t\t- one",
        "",
        "\t\t- two",
        "\t\t- stray line",
        "\t- ## Next",
        "\t\t- three",
    ]


def test_property_line_resets_list_section_and_stays_single_colon():
    src = "# NPC\nSkills:\n- stealth\nRace: elf\n- after"
    assert fmt(src).split("\n") == [
        "- # NPC",
        "\t- Skills:",
        "\t\t- stealth",
        "\t- Race: elf",
        "\t- after",
    ]


def test_bullets_keep_authored_tabs_and_normalize_stars():
    src = "# A\n* top\n\t* child\n\t\t- grandchild"
    assert fmt(src).split("\n") == [
        "- # A",
        "\t- top",
        "\t\t- child",
        "\t\t\t- grandchild",
    ]


def test_output_uses_tabs_only():
    out = fmt("# A\n## B\ntext\nFeatures:\n- x")
    for line in out.split("\n"):
        assert not line.startswith(" ")


def test_no_front_matter_means_no_property_block():
    assert fmt("plain text") == "- plain text"


def test_malformed_front_matter_is_kept_as_body():
    src = "---\nname: [unclosed\n---\nBody"
    data, body = extract_front_matter(src)
    assert data is None
    assert body == src
    assert fmt(src).split("\n") == ["- ---", "- name: [unclosed", "- ---", "- Body"]


def test_non_mapping_front_matter_is_ignored():
    data, _ = extract_front_matter("---\n- a\n- b\n---\ntext")
    assert data is None


def test_front_matter_only_at_document_start():
    data, _ = extract_front_matter("\n---\nname: x\n---\n")
    assert data is None


def test_front_matter_values():
    assert format_property("tags", ["a", "b"]) == "tags:: a, b"
    assert format_property("hp", 12) == "hp:: 12"
    assert format_property("active", True) == "active:: true"
    nested = format_property("stats", {"str": 10, "dex": 14})
    assert nested.startswith("stats:: ")
    assert "\n" not in nested
    for token in ("str", "10", "dex", "14"):
        assert token in nested


def test_format_returns_output_lines():
    lines = HierarchyFormatter().format("---\nname: X\n---\n# H\n")
    assert [l.kind for l in lines] == [LineKind.PROPERTY, LineKind.BLANK, LineKind.HEADER]
    assert lines[2].indent == 0
    assert lines[2].render() == "- # H"


def test_formatter_accepts_prepared_front_matter():
    lines = HierarchyFormatter().format_lines(["text"], {"type": "npc"})
    assert [l.render() for l in lines] == ["type:: npc", "", "- text"]


def test_impossible_date_in_front_matter_is_treated_as_body():
    for bad in ("2024-13-45", "2024-02-30"):
        src = f"---\ndate: {bad}\n---\n# Title\n"
        data, body = extract_front_matter(src)
        assert data is None
        assert body == src
        assert fmt(src).split("\n") == ["- ---", f"- date: {bad}", "- ---", "- # Title"]


def test_non_string_keys_in_front_matter():
    assert fmt("---\n1: one\n2024-01-01: day\n---\nbody").split("\n") == [
        "1:: one",
        "2024-01-01:: day",
        "",
        "- body",
    ]


def test_unhashable_front_matter_key_is_ignored():
    src = "---\n? [a, b]\n: x\n---\nbody"
    data, _ = extract_front_matter(src)
    assert data is None
    assert fmt(src).split("\n")[-1] == "- body"


def test_odd_input_never_raises():
    samples = [
        "",
        "\n\n\n",
        "---",
        "---\n---\n",
        "---\n: : :\n---\n",
        "---\n!!python/object:os.system x\n---\n",
        "######## deep\n# up\n",
        "\t\t\t- orphan\n*\n-\n",
        "Features:\nFeatures:\n- a",
        "\x00\x0b\x0c \x85",
    ]
    for text in samples:
        assert isinstance(fmt(text), str)


def test_only_newline_splits_lines():
    out = fmt("# A\nfirst\x0csecond\nthird fourth\x85end\n")
    assert out.split("\n") == ["- # A", "\t- first\x0csecond", "\t- third fourth\x85end"]


def test_crlf_input():
    assert fmt("# A\r\ntext\r\n").split("\n") == ["- # A", "\t- text"]


def test_empty_bullet_renders_bare_dash():
    assert fmt("# A\n-\n*").split("\n") == ["- # A", "\t-", "\t-"]
