"""Tests for locating a file's service class."""

from __future__ import annotations

from pathlib import Path

from autowire.analysis.ast_parser import parse_module
from autowire.analysis.locator import locate_class, locate_declaration
from autowire.config import Settings
from autowire.constants import Outcome, SkipReason
from tests.conftest import write_ts


class TestLocateClass:
    def test_default_export_at_depth_zero(self) -> None:
        module = parse_module("export default class Foo {}\n")
        decl = locate_class(module, 0)
        assert decl is not None
        assert decl.name == "Foo"

    def test_named_export_ignored_at_depth_zero(self) -> None:
        module = parse_module("export class Foo {}\n")
        assert locate_class(module, 0) is None

    def test_non_class_default_export(self) -> None:
        module = parse_module("export default function make () {}\n")
        assert locate_class(module, 0) is None

    def test_dotted_namespace_unwrapped_to_depth(self) -> None:
        module = parse_module(
            "export namespace Domain.User {\n"
            "  export class UserService {}\n"
            "}\n"
        )
        decl = locate_class(module, 2)
        assert decl is not None
        assert decl.name == "UserService"

    def test_nested_namespace_blocks_unwrapped(self) -> None:
        module = parse_module(
            "export namespace Domain {\n"
            "  export namespace User {\n"
            "    export class UserService {}\n"
            "  }\n"
            "}\n"
        )
        decl = locate_class(module, 2)
        assert decl is not None
        assert decl.name == "UserService"

    def test_depth_mismatch_finds_nothing(self) -> None:
        module = parse_module(
            "export namespace Domain {\n"
            "  export class UserService {}\n"
            "}\n"
        )
        assert locate_class(module, 2) is None

    def test_default_export_wins_at_any_depth(self) -> None:
        module = parse_module("export default class Flat {}\n")
        decl = locate_class(module, 3)
        assert decl is not None
        assert decl.name == "Flat"

    def test_non_exported_class_in_namespace_ignored(self) -> None:
        module = parse_module(
            "export namespace Billing {\n"
            "  class Hidden {}\n"
            "  export class Invoice {}\n"
            "}\n"
        )
        decl = locate_class(module, 1)
        assert decl is not None
        assert decl.name == "Invoice"


class TestLocateDeclaration:
    def test_resolved(self, src_root: Path, settings: Settings) -> None:
        path = write_ts(
            src_root,
            "Domain/Thing.ts",
            "export namespace Domain { export class Thing {} }\n",
        )
        result = locate_declaration(path, settings)
        assert result.outcome is Outcome.RESOLVED
        assert result.value is not None
        assert result.value.declaration.name == "Thing"
        assert result.value.namespace == ("Domain",)
        assert result.value.depth == 1

    def test_unsupported_extension(
        self, src_root: Path, settings: Settings
    ) -> None:
        path = write_ts(src_root, "Thing.js", "export default class Thing {}\n")
        result = locate_declaration(path, settings)
        assert result.reason is SkipReason.UNSUPPORTED_EXTENSION

    def test_missing_marker(self, tmp_path: Path, settings: Settings) -> None:
        path = write_ts(tmp_path, "app/Thing.ts", "export default class Thing {}\n")
        result = locate_declaration(path, settings)
        assert result.reason is SkipReason.MALFORMED_PATH

    def test_parse_error(self, src_root: Path, settings: Settings) -> None:
        path = write_ts(src_root, "Bad.ts", "export default class Bad {\n")
        result = locate_declaration(path, settings)
        assert result.reason is SkipReason.PARSE_ERROR

    def test_no_class(self, src_root: Path, settings: Settings) -> None:
        path = write_ts(
            src_root, "IFoo.ts", "export interface IFoo { run (): void }\n"
        )
        result = locate_declaration(path, settings)
        assert result.reason is SkipReason.NO_CLASS

    def test_anonymous_class_skipped(
        self, src_root: Path, settings: Settings
    ) -> None:
        path = write_ts(src_root, "Anon.ts", "export default class {}\n")
        result = locate_declaration(path, settings)
        assert result.reason is SkipReason.NO_CLASS
