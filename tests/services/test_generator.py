"""Tests for short code generation."""

import string

import pytest

from shorturl.services.generator import CodeGenerator


class TestCodeGenerator:

    def test_default_length_and_alphabet(self):
        generator = CodeGenerator()
        code = generator.generate()

        assert len(code) == 6
        assert set(code) <= set(string.ascii_letters + string.digits)

    def test_explicit_length(self):
        assert len(CodeGenerator().generate(9)) == 9

    def test_custom_alphabet(self):
        code = CodeGenerator(alphabet="ab", default_length=32).generate()
        assert set(code) <= {"a", "b"}

    def test_codes_are_fresh(self):
        generator = CodeGenerator(default_length=8)
        codes = {generator.generate() for _ in range(1000)}
        assert len(codes) == 1000

    @pytest.mark.parametrize("alphabet", ["", "a", "aaaa"])
    def test_rejects_degenerate_alphabet(self, alphabet):
        with pytest.raises(ValueError):
            CodeGenerator(alphabet=alphabet)

    def test_rejects_non_positive_length(self):
        with pytest.raises(ValueError):
            CodeGenerator(default_length=0)
