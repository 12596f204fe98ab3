from __future__ import annotations

from tests._tree_fixtures import BUILD_A, BUILD_B, ESTREE_GRAMMAR, node
from treeclone.config import DetectionConfig
from treeclone.languages.python import PYTHON_GRAMMAR, parse_python
from treeclone.matcher import Match, Matcher, Member
from treeclone.navigator import (
    TreeNavigator,
    identifiers_equal,
    literals_equal,
    types_equal,
)
from treeclone.windows import FileSequence, linearize


def _sequences(*sources: str) -> list[FileSequence]:
    nav = TreeNavigator(PYTHON_GRAMMAR)
    return [
        linearize(f"f{i}.py", src, parse_python(src, f"f{i}.py"), nav)
        for i, src in enumerate(sources)
    ]


def _find(sources: list[str], **options: object) -> list[Match]:
    config = DetectionConfig(**options)  # type: ignore[arg-type]
    return Matcher(_sequences(*sources), config).find_matches()


def test_renamed_function_matches_identical_stretch() -> None:
    matches = _find([BUILD_A, BUILD_B], threshold=8)
    assert matches == [Match(members=(Member(0, 3), Member(1, 3)), length=12)]


def test_renamed_function_without_identifier_matching() -> None:
    matches = _find([BUILD_A, BUILD_B], threshold=8, match_identifiers=False)
    assert matches == [Match(members=(Member(0, 0), Member(1, 0)), length=16)]


def test_threshold_longer_than_identical_stretch() -> None:
    assert _find([BUILD_A, BUILD_B], threshold=13) == []


def test_literal_mismatch_splits_bucket() -> None:
    same = "value = compute(1, 2)\n"
    other = "value = compute(1, 3)\n"
    strict = _find([same, same, other], threshold=6)
    assert [m.members for m in strict] == [(Member(0, 0), Member(1, 0))]

    relaxed = _find([same, same, other], threshold=6, match_literals=False)
    assert [m.members for m in relaxed] == [
        (Member(0, 0), Member(1, 0), Member(2, 0))
    ]


def test_min_instances_bound() -> None:
    assert len(_find([BUILD_A] * 3, threshold=8, min_instances=3)) == 1
    assert _find([BUILD_A] * 3, threshold=8, min_instances=4) == []


def test_same_file_instances_never_overlap() -> None:
    matches = _find([BUILD_A + BUILD_A], threshold=8)
    assert matches == [Match(members=(Member(0, 0), Member(0, 16)), length=16)]


def test_imports_are_boilerplate() -> None:
    source = "import os\nimport sys\n"
    assert _find([source, source], threshold=2) == []
    assert _find([source, source], threshold=1) == []


def test_dynamic_import_is_boilerplate() -> None:
    source = "json = __import__('json')\nyaml = __import__('yaml')\n"
    assert _find([source, source], threshold=3) == []


def test_ignored_files_are_not_matched() -> None:
    sequences = _sequences(BUILD_A, BUILD_A)
    config = DetectionConfig(threshold=8, ignore_pattern=r"f1\.py$")
    assert Matcher(sequences, config).find_matches() == []


def test_preference_prefers_more_instances() -> None:
    matcher = Matcher(_sequences(BUILD_A, BUILD_A, BUILD_A), DetectionConfig())
    wide = Match(members=(Member(0, 0), Member(1, 0), Member(2, 0)), length=8)
    long = Match(members=(Member(0, 3), Member(1, 3)), length=12)
    assert sorted([long, wide], key=matcher._preference_key) == [wide, long]


def test_preference_prefers_longer_match() -> None:
    matcher = Matcher(_sequences(BUILD_A, BUILD_A), DetectionConfig())
    short = Match(members=(Member(0, 3), Member(1, 3)), length=4)
    full = Match(members=(Member(0, 0), Member(1, 0)), length=16)
    assert sorted([short, full], key=matcher._preference_key) == [full, short]


def test_preference_tie_goes_to_earliest_position() -> None:
    matcher = Matcher(_sequences(BUILD_A, BUILD_A), DetectionConfig())
    later = Match(members=(Member(0, 5), Member(1, 5)), length=4)
    earlier = Match(members=(Member(0, 3), Member(1, 3)), length=4)
    assert sorted([later, earlier], key=matcher._preference_key) == [
        earlier,
        later,
    ]


def _leaf_sequences(*files: str) -> list[FileSequence]:
    # One leaf statement per line, typed by its letter.
    nav = TreeNavigator(ESTREE_GRAMMAR)
    sequences = []
    for i, letters in enumerate(files):
        body = [node(letter, line) for line, letter in enumerate(letters, start=1)]
        source = "\n".join(letters) + "\n"
        tree = node("Program", body=body)
        sequences.append(linearize(f"f{i}.js", source, tree, nav))
    return sequences


def test_continuation_survives_rejected_predecessor() -> None:
    # "pqrs" wins three ways and claims the start of "rsabcdef" in f0; the
    # part of that duplicate past the claimed lines is still reported.
    sequences = _leaf_sequences("pqrsabcdef", "zrsabcdef", "pqrsw", "pqrsv")
    config = DetectionConfig(
        threshold=4, match_identifiers=False, match_literals=False
    )
    assert Matcher(sequences, config).find_matches() == [
        Match(members=(Member(0, 0), Member(2, 0), Member(3, 0)), length=4),
        Match(members=(Member(0, 4), Member(1, 3)), length=6),
    ]


def test_accepted_match_skips_its_continuations() -> None:
    sequences = _leaf_sequences("xabcdefy", "zabcdefw")
    config = DetectionConfig(
        threshold=3, match_identifiers=False, match_literals=False
    )
    assert Matcher(sequences, config).find_matches() == [
        Match(members=(Member(0, 1), Member(1, 1)), length=6)
    ]


def test_overlapping_groups_resolved_on_lines() -> None:
    matches = _find([BUILD_A, BUILD_B, BUILD_A + BUILD_B], threshold=8)
    seqs = _sequences(BUILD_A, BUILD_B, BUILD_A + BUILD_B)
    claimed: set[tuple[int, int]] = set()
    for match in matches:
        for m in match.members:
            first, last = seqs[m.file_index].line_range(m.start, match.length)
            lines = {(m.file_index, line) for line in range(first, last + 1)}
            assert claimed.isdisjoint(lines)
            claimed |= lines


def test_nested_definitions_report_disjoint_lines() -> None:
    source = (
        "def f():\n"
        "    pass\n"
        "    pass\n"
        "    def f():\n"
        "        pass\n"
        "        pass\n"
    )
    [seq] = _sequences(source)
    [match] = Matcher([seq], DetectionConfig(threshold=3)).find_matches()
    assert match == Match(members=(Member(0, 0), Member(0, 4)), length=4)
    assert [seq.line_range(m.start, match.length) for m in match.members] == [
        (1, 3),
        (4, 6),
    ]


def test_matches_are_equivalent_over_full_length() -> None:
    sources = [BUILD_A, BUILD_B, BUILD_A + BUILD_B, BUILD_B + BUILD_A]
    seqs = _sequences(*sources)
    matches = Matcher(seqs, DetectionConfig(threshold=6)).find_matches()
    assert matches
    for match in matches:
        for offset in range(match.length):
            nodes = [
                seqs[m.file_index].nodes[m.start + offset] for m in match.members
            ]
            assert types_equal(nodes)
            assert identifiers_equal(nodes)
            assert literals_equal(nodes)
