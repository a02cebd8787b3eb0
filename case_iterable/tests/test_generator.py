"""
End-to-end tests: derive case iteration code from source and run it.
"""

from __future__ import annotations

import ast
import textwrap

import pytest

from case_iterable import CaseIterableGenerator, DiagnosticKind, GenerationError, GeneratorConfig

ABC_SOURCE = textwrap.dedent(
    """
    from enum import Enum


    class Letter(Enum):
        A = 1
        B = 2
        C = 3
    """
)


def no_comment_config(**kwargs) -> GeneratorConfig:
    config = GeneratorConfig(**kwargs)
    config.add_generation_comment = False
    return config


def run(code: str) -> dict:
    namespace = {"__name__": "generated"}
    exec(compile(code, "<generated>", "exec"), namespace)
    return namespace


def derive_and_run(source: str, names: list[str] | None = None, config: GeneratorConfig | None = None) -> dict:
    generator = CaseIterableGenerator(config or no_comment_config())
    return run(generator.derive(source, names))


class TestEnumerateAll:
    def test_letter_scenario(self):
        letter = derive_and_run(ABC_SOURCE, ["Letter"])["Letter"]
        assert letter.A.next() == letter.B
        assert letter.B.next() == letter.C
        assert letter.C.next() is None
        assert list(letter.all_cases()) == [letter.A, letter.B, letter.C]

    def test_single_variant_scenario(self):
        source = """
        from enum import Enum

        class Only(Enum):
            X = "x"
        """
        only = derive_and_run(textwrap.dedent(source))["Only"]
        assert only.X.next() is None
        assert list(only.all_cases()) == [only.X]

    @pytest.mark.parametrize("count", [1, 2, 3, 10])
    def test_n_advances_reproduce_declaration_order(self, count):
        members = "\n".join(f"    M{i} = {count - i}" for i in range(count))
        source = f"from enum import IntEnum\n\nclass Many(IntEnum):\n{members}\n"
        many = derive_and_run(source)["Many"]

        iterator = many.all_cases()
        produced = [next(iterator) for _ in range(count)]
        assert produced == [many[f"M{i}"] for i in range(count)]
        assert len(set(produced)) == count
        for _ in range(3):
            with pytest.raises(StopIteration):
                next(iterator)

    def test_all_cases_is_restartable(self):
        letter = derive_and_run(ABC_SOURCE)["Letter"]
        first = letter.all_cases()
        next(first)
        second = letter.all_cases()
        assert list(second) == [letter.A, letter.B, letter.C]
        assert list(first) == [letter.B, letter.C]

    def test_carriers_are_independent(self):
        letter = derive_and_run(ABC_SOURCE)["Letter"]
        left, right = letter.all_cases(), letter.all_cases()
        assert next(left) == letter.A
        assert next(left) == letter.B
        assert next(right) == letter.A

    def test_declaration_order_not_value_order(self):
        source = """
        from enum import IntEnum

        class Level(IntEnum):
            HIGH = 3
            LOW = 1
            MEDIUM = 2
        """
        level = derive_and_run(textwrap.dedent(source))["Level"]
        assert list(level.all_cases()) == [level.HIGH, level.LOW, level.MEDIUM]
        assert level.HIGH.next() == level.LOW

    def test_future_annotations_module(self):
        source = """
        from __future__ import annotations

        import enum

        class Color(enum.Enum):
            RED = enum.auto()
            GREEN = enum.auto()
        """
        config = no_comment_config(quote_forward_references=False)
        color = derive_and_run(textwrap.dedent(source), config=config)["Color"]
        assert list(color.all_cases()) == [color.RED, color.GREEN]

    def test_all_enumerations_when_no_names(self):
        source = """
        from enum import Enum, Flag, auto

        class Color(Enum):
            RED = auto()

        class Point:
            x = 0

        class Perm(Flag):
            R = 4
            W = 2
            X = 1
        """
        namespace = derive_and_run(textwrap.dedent(source))
        assert "ColorIterator" in namespace
        assert "PermIterator" in namespace
        assert "PointIterator" not in namespace
        perm = namespace["Perm"]
        assert list(perm.all_cases()) == [perm.R, perm.W, perm.X]


    def test_distinct_values_terminate(self):
        source = "from enum import Enum\n\nclass Flagged(Enum):\n    ONE = 1\n    TEXT = '1'\n    NONE = None\n"
        flagged = derive_and_run(source)["Flagged"]
        assert list(flagged.all_cases()) == [flagged.ONE, flagged.TEXT, flagged.NONE]
        assert len(flagged) == 3


class TestLocalEnumBase:
    SOURCE = textwrap.dedent(
        """
        from enum import Enum

        class Described(Enum):
            def describe(self):
                return self.name.lower()

        class Color(Described):
            RED = 1
            GREEN = 2
        """
    )

    def test_every_enumeration_skips_memberless_base(self):
        namespace = derive_and_run(self.SOURCE)
        color = namespace["Color"]
        assert list(color.all_cases()) == [color.RED, color.GREEN]
        assert color.RED.describe() == "red"
        assert "DescribedIterator" not in namespace

    def test_named_subclass(self):
        color = derive_and_run(self.SOURCE, ["Color"])["Color"]
        assert color.GREEN.next() is None
        assert [member.describe() for member in color.all_cases()] == ["red", "green"]

    def test_named_memberless_base_rejected(self):
        with pytest.raises(GenerationError) as exc_info:
            CaseIterableGenerator().derive(self.SOURCE, ["Described"])
        assert exc_info.value.diagnostic.kind == DiagnosticKind.EMPTY_ENUMERATION
        assert exc_info.value.diagnostic.name == "Described"


class TestGenerationResult:
    def test_generate_returns_artifact(self):
        generator = CaseIterableGenerator()
        declaration = ast.parse(ABC_SOURCE).body[1]
        result = generator.generate(declaration)
        assert result.ok
        assert result.diagnostic is None
        assert result.unwrap().iterator_name == "LetterIterator"

    def test_generate_returns_diagnostic(self):
        generator = CaseIterableGenerator()
        declaration = ast.parse("class Planet(Enum):\n    EARTH = (5.97e24, 6.37e6)\n").body[0]
        result = generator.generate(declaration)
        assert not result.ok
        assert result.artifact is None
        assert result.diagnostic.kind == DiagnosticKind.PAYLOAD_VARIANT
        with pytest.raises(GenerationError) as exc_info:
            result.unwrap()
        assert exc_info.value.diagnostic is result.diagnostic

    def test_generate_source_invalid_source(self):
        results = CaseIterableGenerator().generate_source("class Broken(")
        assert len(results) == 1
        assert results[0].diagnostic.kind == DiagnosticKind.INVALID_SOURCE

    def test_generate_source_missing_name(self):
        results = CaseIterableGenerator().generate_source(ABC_SOURCE, ["Letter", "Missing"])
        assert results[0].ok
        assert results[1].diagnostic.kind == DiagnosticKind.DECLARATION_NOT_FOUND

    def test_generator_keeps_no_state_between_calls(self):
        generator = CaseIterableGenerator(no_comment_config())
        first = generator.derive(ABC_SOURCE)
        generator.derive("from enum import Enum\n\nclass Other(Enum):\n    Q = 1\n")
        assert generator.derive(ABC_SOURCE) == first


class TestRejections:
    @pytest.mark.parametrize(
        "source, kind, name",
        [
            ("class Point:\n    x = 1\n", DiagnosticKind.WRONG_SHAPE, "Point"),
            ("from enum import Enum\nclass Planet(Enum):\n    EARTH = (5.97e24, 6.37e6)\n", DiagnosticKind.PAYLOAD_VARIANT, "EARTH"),
            ("from enum import Enum\nclass Nothing(Enum):\n    pass\n", DiagnosticKind.EMPTY_ENUMERATION, "Nothing"),
        ],
    )
    def test_derive_rejects(self, source, kind, name):
        target = ast.parse(source).body[-1].name
        with pytest.raises(GenerationError) as exc_info:
            CaseIterableGenerator().derive(source, [target])
        assert exc_info.value.diagnostic.kind == kind
        assert exc_info.value.diagnostic.name == name

    def test_alias_member_rejected(self):
        source = "from enum import Enum\n\nclass Letter(Enum):\n    A = 1\n    B = 1\n    C = 2\n"
        with pytest.raises(GenerationError) as exc_info:
            CaseIterableGenerator().derive(source)
        assert exc_info.value.diagnostic.kind == DiagnosticKind.ALIAS_VARIANT
        assert exc_info.value.diagnostic.name == "B"
        assert "Letter.A" in str(exc_info.value)

    def test_one_rejection_produces_no_output(self):
        source = ABC_SOURCE + "\n\nclass Planet(Enum):\n    EARTH = (5.97e24, 6.37e6)\n"
        with pytest.raises(GenerationError):
            CaseIterableGenerator().derive(source)

    def test_no_enumeration_in_module(self):
        with pytest.raises(GenerationError) as exc_info:
            CaseIterableGenerator().derive("x = 1\n")
        assert exc_info.value.diagnostic.kind == DiagnosticKind.DECLARATION_NOT_FOUND


class TestGenerationComment:
    def test_header_comment(self):
        code = CaseIterableGenerator().derive(ABC_SOURCE)
        first_line = code.splitlines()[0]
        assert first_line.startswith("# Case iteration for Letter generated by case_iterable v")
        assert first_line.endswith(": case_iterable")

    def test_header_comment_disabled(self):
        code = CaseIterableGenerator(no_comment_config()).derive(ABC_SOURCE)
        assert not code.startswith("#")
        assert code.endswith("\n")
