"""
tests/test_templates.py
Unit tests for spring_helper.templates.

Tests cover:
- Entity rendering (imports, @Id on the first column only, field order)
- Repository / service / service impl / controller rendering
- Name agreement across the five files of one table
- Layout and naming of the GeneratedFile list
"""

from __future__ import annotations

from typing import List

import pytest

from spring_helper.models import (
    ArtifactKind,
    ColumnDescriptor,
    IdentifierSet,
    ResolvedColumn,
)
from spring_helper.templates import render_artifact, render_table

PACKAGE: str = "tw.mingchang.app"


def _columns(*specs) -> List[ResolvedColumn]:
    return [
        ResolvedColumn(
            column=ColumnDescriptor(name=name, native_type=native, position=i),
            mapped_type=java,
        )
        for i, (name, native, java) in enumerate(specs)
    ]


@pytest.fixture()
def user_account_columns() -> List[ResolvedColumn]:
    return _columns(
        ("id", "int4", "Integer"),
        ("user_name", "varchar", "String"),
        ("created_at", "timestamp", "LocalDateTime"),
        ("tags", "_varchar", "List<String>"),
    )


@pytest.fixture()
def identifiers() -> IdentifierSet:
    return IdentifierSet.from_table_name("user_account")


def _render(kind, identifiers, columns=()) -> str:
    return render_artifact(
        kind,
        identifiers,
        columns,
        PACKAGE,
        schema_name="public",
        table_name="user_account",
    )


class TestEntity:
    def test_header_and_annotations(self, identifiers, user_account_columns) -> None:
        src = _render(ArtifactKind.ENTITY, identifiers, user_account_columns)
        assert src.startswith("package tw.mingchang.app.model;\n")
        assert '@Table(schema = "public", value = "user_account")' in src
        assert "public class UserAccount {" in src
        for annotation in ("@Data", "@AllArgsConstructor", "@NoArgsConstructor"):
            assert annotation in src

    def test_imports_follow_field_types(self, identifiers, user_account_columns) -> None:
        src = _render(ArtifactKind.ENTITY, identifiers, user_account_columns)
        assert "import java.time.LocalDateTime;" in src
        assert "import java.util.List;" in src
        assert "import org.springframework.data.annotation.Id;" in src
        assert "import java.math.BigDecimal;" not in src

    def test_only_first_column_is_id(self, identifiers, user_account_columns) -> None:
        src = _render(ArtifactKind.ENTITY, identifiers, user_account_columns)
        assert src.count("@Id") == 1
        assert '    @Id\n    @Column("id")\n    private Integer id;' in src

    def test_fields_in_column_order(self, identifiers, user_account_columns) -> None:
        src = _render(ArtifactKind.ENTITY, identifiers, user_account_columns)
        positions = [
            src.index("private Integer id;"),
            src.index("private String userName;"),
            src.index("private LocalDateTime createdAt;"),
            src.index("private List<String> tags;"),
        ]
        assert positions == sorted(positions)
        assert '@Column("user_name")' in src

    def test_empty_mapped_type_written_verbatim(self, identifiers) -> None:
        columns = _columns(("id", "int4", "Integer"), ("payload", "jsonb", ""))
        src = _render(ArtifactKind.ENTITY, identifiers, columns)
        assert "    private  payload;" in src

    def test_table_without_columns(self, identifiers) -> None:
        src = _render(ArtifactKind.ENTITY, identifiers, [])
        assert "@Id" not in src
        assert "public class UserAccount {" in src


class TestSupportingArtifacts:
    def test_repository(self, identifiers) -> None:
        src = _render(ArtifactKind.REPOSITORY, identifiers)
        assert src.startswith("package tw.mingchang.app.repository;\n")
        assert "import tw.mingchang.app.model.UserAccount;" in src
        assert "@Repository" in src
        assert (
            "public interface UserAccountRepository "
            "extends R2dbcRepository<UserAccount, Integer> {" in src
        )

    def test_repository_primary_key_type(self, identifiers) -> None:
        src = render_artifact(
            ArtifactKind.REPOSITORY, identifiers, [], PACKAGE, primary_key_type="Long"
        )
        assert "R2dbcRepository<UserAccount, Long>" in src

    def test_service_interface_is_empty(self, identifiers) -> None:
        src = _render(ArtifactKind.SERVICE_INTERFACE, identifiers)
        assert src == (
            "package tw.mingchang.app.service;\n\n"
            "public interface UserAccountService {\n}\n"
        )

    def test_service_impl(self, identifiers) -> None:
        src = _render(ArtifactKind.SERVICE_IMPL, identifiers)
        assert src.startswith("package tw.mingchang.app.service.impl;\n")
        assert "@Service" in src
        assert "public class UserAccountServiceImpl implements UserAccountService {" in src
        assert "private final UserAccountRepository userAccountRepository;" in src
        assert "public UserAccountServiceImpl(UserAccountRepository userAccountRepository)" in src

    def test_controller(self, identifiers) -> None:
        src = _render(ArtifactKind.CONTROLLER, identifiers)
        assert src.startswith("package tw.mingchang.app.controller;\n")
        assert "@RestController" in src
        assert '@RequestMapping("/userAccount")' in src
        assert "private final UserAccountService userAccountService;" in src
        assert "@GetMapping" not in src


class TestRenderTable:
    def test_five_files_in_order(self, identifiers, user_account_columns) -> None:
        files = render_table(
            "user_account", user_account_columns, identifiers, PACKAGE, schema_name="public"
        )
        assert [f.relative_path for f in files] == [
            "model/UserAccount.java",
            "repository/UserAccountRepository.java",
            "service/UserAccountService.java",
            "service/impl/UserAccountServiceImpl.java",
            "controller/UserAccountController.java",
        ]

    def test_custom_extension(self, identifiers) -> None:
        files = render_table(
            "user_account", [], identifiers, PACKAGE, schema_name="public", file_extension=".kt"
        )
        assert all(f.file_name.endswith(".kt") for f in files)

    def test_declared_names_match_references(self, identifiers, user_account_columns) -> None:
        files = {
            f.relative_directory: f.content
            for f in render_table(
                "user_account", user_account_columns, identifiers, PACKAGE, schema_name="public"
            )
        }
        # Every type declared in one file is referenced verbatim by its consumer
        assert "class UserAccount " in files["model"]
        assert "R2dbcRepository<UserAccount," in files["repository"]
        assert "interface UserAccountRepository " in files["repository"]
        assert "import tw.mingchang.app.repository.UserAccountRepository;" in files["service/impl"]
        assert "interface UserAccountService " in files["service"]
        assert "implements UserAccountService " in files["service/impl"]
        assert "import tw.mingchang.app.service.UserAccountService;" in files["controller"]

    def test_rendering_is_deterministic(self, identifiers, user_account_columns) -> None:
        first = render_table(
            "user_account", user_account_columns, identifiers, PACKAGE, schema_name="public"
        )
        second = render_table(
            "user_account", user_account_columns, identifiers, PACKAGE, schema_name="public"
        )
        assert [f.content for f in first] == [f.content for f in second]
