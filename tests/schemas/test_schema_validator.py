"""Tests for schema compilation, validation and the compile-once cache."""

import asyncio
from pathlib import Path

import pytest
from jsonschema import Draft7Validator, Draft202012Validator
from referencing import Registry

from json_validator.core.document import Document
from json_validator.exceptions import SchemaLoadError
from json_validator.schemas.loader import load_schema
from json_validator.schemas.validator import (
    SchemaCache,
    compile_schema,
    validate,
)


class TestCompileSchema:
    """Test schema compilation."""

    def test_defaults_to_draft7(self, user_schema) -> None:
        assert isinstance(compile_schema(user_schema), Draft7Validator)

    def test_uses_declared_dialect(self) -> None:
        schema = {
            "$schema": "https://json-schema.org/draft/2020-12/schema",
            "type": "object",
        }

        assert isinstance(compile_schema(schema), Draft202012Validator)

    def test_invalid_schema_raises(self) -> None:
        with pytest.raises(SchemaLoadError, match="Invalid schema"):
            compile_schema({"type": 12})

    def test_boolean_schema(self) -> None:
        compiled = compile_schema(False)

        assert not compiled.is_valid({})

    def test_local_definitions_ref(self) -> None:
        compiled = compile_schema(
            {
                "definitions": {"price": {"type": "number", "minimum": 0}},
                "properties": {"price": {"$ref": "#/definitions/price"}},
            }
        )

        assert compiled.is_valid({"price": 3})
        assert not compiled.is_valid({"price": -1})

    def test_meta_schema_ref_resolves_offline(self) -> None:
        compiled = compile_schema(
            {"$ref": "http://json-schema.org/draft-07/schema#"}
        )

        assert compiled.is_valid({"type": "object"})
        assert not compiled.is_valid({"type": 12})

    @pytest.mark.parametrize(
        "ref",
        [
            "defs.json",
            "#/definitions/missing",
            "https://example.com/schemas/remote.json",
        ],
    )
    def test_unresolvable_ref_raises(self, ref: str) -> None:
        schema = {"properties": {"a": {"$ref": ref}}}

        with pytest.raises(SchemaLoadError, match="Unresolvable") as exc_info:
            compile_schema(schema)

        assert ref in str(exc_info.value)

    def test_property_named_like_keyword(self) -> None:
        compiled = compile_schema({"properties": {"$id": {"type": "string"}}})

        assert not compiled.is_valid({"$id": 1})

    def test_ref_inside_enum_is_data(self) -> None:
        compiled = compile_schema({"enum": [{"$ref": "nowhere.json"}]})

        assert compiled.is_valid({"$ref": "nowhere.json"})


class TestValidate:
    """Test document validation against a compiled schema."""

    def test_valid_document(self, write_file, product_schema) -> None:
        path = write_file("product.json", {"name": "Widget", "price": 10})

        result = validate(compile_schema(product_schema), path)

        assert result.valid
        assert result.error is None

    def test_minimum_violation(self, write_file, product_schema) -> None:
        path = write_file("product.json", {"name": "Widget", "price": -5})

        result = validate(compile_schema(product_schema), path)

        assert not result.valid
        assert "minimum" in result.error
        assert result.error.startswith("$.price ")

    def test_collects_every_violation(self, write_file, user_schema) -> None:
        path = write_file(
            "user.json",
            {"id": 0, "email": "not-an-email", "role": "guest", "extra": 1},
        )

        result = validate(compile_schema(user_schema), path)

        assert not result.valid
        violations = result.error.split(", $")
        assert len(violations) == 4
        assert "$.id 0 is less than or equal to the minimum of 0" in (
            result.error
        )
        assert "$.email 'not-an-email' is not a 'email'" in result.error
        assert "$.role 'guest' is not one of" in result.error
        assert "$ Additional properties are not allowed" in result.error

    def test_date_time_format(self, write_file, user_schema) -> None:
        path = write_file(
            "user.json",
            {"id": 1, "email": "a@example.com", "created": "yesterday"},
        )

        result = validate(compile_schema(user_schema), path)

        assert not result.valid
        assert "'yesterday' is not a 'date-time'" in result.error

    def test_required_property(self, write_file, product_schema) -> None:
        path = write_file("product.json", {"name": "Widget"})

        result = validate(compile_schema(product_schema), path)

        assert result.error == "$ 'price' is a required property"

    def test_composition_keywords(self, write_file) -> None:
        schema = {
            "oneOf": [
                {"type": "string", "maxLength": 3},
                {"type": "integer", "multipleOf": 2},
            ],
            "not": {"const": "no"},
        }
        compiled = compile_schema(schema)

        assert validate(compiled, write_file("a.json", '"abc"')).valid
        assert validate(compiled, write_file("b.json", "4")).valid
        assert not validate(compiled, write_file("c.json", "3")).valid
        assert not validate(compiled, write_file("d.json", '"no"')).valid

    def test_unresolvable_ref_becomes_failure(self, write_file) -> None:
        # Built directly, without the reference check of compile_schema
        compiled = Draft7Validator(
            {"properties": {"a": {"$ref": "defs.json"}}}, registry=Registry()
        )
        path = write_file("doc.json", {"a": 1})

        result = validate(compiled, path)

        assert not result.valid
        assert "could not be resolved" in result.error

    def test_syntax_error_reported_like_syntax_check(
        self, write_file, product_schema
    ) -> None:
        path = write_file("broken.json", '{"name": "test", "price": }')

        result = validate(compile_schema(product_schema), path)

        assert not result.valid
        assert result.error.startswith("Invalid JSON syntax:")

    def test_missing_file(self, tmp_path: Path, product_schema) -> None:
        result = validate(
            compile_schema(product_schema), tmp_path / "missing.json"
        )

        assert not result.valid
        assert result.error.startswith("Failed to read file:")

    def test_accepts_loaded_document(self, tmp_path: Path) -> None:
        document = Document(path=tmp_path / "x.json", content='{"a": 1}')

        result = validate(compile_schema({"required": ["b"]}), document)

        assert not result.valid
        assert result.path == document.path


class CountingCompiler:
    """Compiler that records how many schemas it compiled."""

    def __init__(self) -> None:
        self.calls = 0

    def __call__(self, schema):
        self.calls += 1
        return compile_schema(schema)


class TestSchemaCache:
    """Test the per-run compile-once cache."""

    @pytest.mark.asyncio
    async def test_compiles_once_per_path(
        self, write_file, product_schema
    ) -> None:
        path = write_file("schema.json", product_schema)
        compiler = CountingCompiler()
        cache = SchemaCache(compiler=compiler)

        first = await cache.get(path)
        for _ in range(5):
            assert await cache.get(path) is first

        assert compiler.calls == 1
        assert cache.compilations == 1
        assert len(cache) == 1

    @pytest.mark.asyncio
    async def test_concurrent_lookups_compile_once(
        self, write_file, product_schema
    ) -> None:
        path = write_file("schema.json", product_schema)
        compiler = CountingCompiler()
        cache = SchemaCache(compiler=compiler)

        validators = await asyncio.gather(*(cache.get(path) for _ in range(10)))

        assert compiler.calls == 1
        assert all(v is validators[0] for v in validators)

    @pytest.mark.asyncio
    async def test_equivalent_paths_share_entry(
        self, write_file, product_schema
    ) -> None:
        path = write_file("schemas/schema.json", product_schema)
        compiler = CountingCompiler()
        cache = SchemaCache(compiler=compiler)

        await cache.get(path)
        await cache.get(path.parent / ".." / "schemas" / "schema.json")

        assert compiler.calls == 1

    @pytest.mark.asyncio
    async def test_distinct_paths_compile_separately(
        self, write_file, product_schema, user_schema
    ) -> None:
        compiler = CountingCompiler()
        cache = SchemaCache(compiler=compiler)

        await cache.get(write_file("product.json", product_schema))
        await cache.get(write_file("user.json", user_schema))

        assert compiler.calls == 2

    @pytest.mark.asyncio
    async def test_load_failure_is_remembered(self, tmp_path: Path) -> None:
        calls = []

        def loader(path: Path):
            calls.append(path)
            return load_schema(path)

        cache = SchemaCache(loader=loader)
        missing = tmp_path / "missing.json"

        for _ in range(2):
            with pytest.raises(SchemaLoadError):
                await cache.get(missing)

        assert calls == [missing]

    @pytest.mark.asyncio
    async def test_compile_failure_names_schema_file(self, write_file) -> None:
        path = write_file("bad.schema.json", {"type": 12})
        cache = SchemaCache()

        with pytest.raises(SchemaLoadError) as exc_info:
            await cache.get(path)

        assert exc_info.value.target == str(path)
        assert "Invalid schema" in str(exc_info.value)
