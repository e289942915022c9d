from decimal import Decimal

import pytest

from partsplm.bom_engine.catalog import (
    ResolutionReport,
    StructureLocator,
    is_assembly,
    read_structure,
)


def test_locator_prefers_root_then_first_level_subdirectory(parts_dir, write_csv):
    in_sub = write_csv(parts_dir / "assemblies", "PCA-100", [["IPN", "qty"], ["RES-001", "1"]])
    locator = StructureLocator(parts_dir)

    assert locator.find_structure_file("PCA-100") == in_sub

    at_root = write_csv(parts_dir, "PCA-100", [["IPN", "qty"], ["RES-001", "2"]])
    assert locator.find_structure_file("PCA-100") == at_root


def test_locator_does_not_search_deeper_than_one_level(parts_dir, write_csv):
    write_csv(parts_dir / "a" / "b", "PCA-DEEP", [["IPN"], ["RES-001"]])

    assert StructureLocator(parts_dir).find_structure_file("PCA-DEEP") is None


@pytest.mark.parametrize("identifier", ["", "..", "../PCA-1", "sub/PCA-1"])
def test_locator_ignores_path_like_identifiers(parts_dir, write_csv, identifier):
    write_csv(parts_dir / "sub", "PCA-1", [["IPN"], ["RES-001"]])

    assert StructureLocator(parts_dir).find_structure_file(identifier) is None


def test_locator_missing_root_is_not_an_error(tmp_path):
    assert StructureLocator(tmp_path / "nope").find_structure_file("PCA-1") is None


@pytest.mark.parametrize(
    "identifier, expected",
    [
        ("PCA-001", True),
        ("asy-frame", True),
        ("Pca-x", True),
        ("RES-001", False),
        ("PCA001", False),
        ("", False),
    ],
)
def test_is_assembly_prefix_convention(identifier, expected):
    assert is_assembly(identifier) is expected


def test_is_assembly_custom_prefixes():
    assert is_assembly("MOD-7", ("MOD-",))
    assert not is_assembly("PCA-7", ("MOD-",))


def test_read_structure_parses_lines_in_order(parts_dir, write_csv):
    path = write_csv(
        parts_dir,
        "PCA-SIMPLE",
        [
            ["IPN", "qty", "ref", "description"],
            ["RES-001", "2", "R1,R2", "100R Resistor"],
            ["CAP-001", "", "C1", ""],
            ["", "4", "X1", "no child"],
            ["IC-001", "bogus", "U1", "Op Amp"],
        ],
    )

    lines = read_structure(path)

    assert [(line.child, line.quantity, line.ref, line.description) for line in lines] == [
        ("RES-001", Decimal("2"), "R1,R2", "100R Resistor"),
        ("CAP-001", Decimal("1"), "C1", ""),
        ("IC-001", Decimal("1"), "U1", "Op Amp"),
    ]


def test_read_structure_without_quantity_column(parts_dir, write_csv):
    path = write_csv(parts_dir, "PCA-MIN", [["component"], ["RES-001"], ["RES-002"]])

    lines = read_structure(path)

    assert [line.child for line in lines] == ["RES-001", "RES-002"]
    assert all(line.quantity == Decimal(1) for line in lines)


def test_read_structure_rejects_negative_quantity(parts_dir, write_csv):
    path = write_csv(
        parts_dir,
        "PCA-NEG",
        [["IPN", "qty"], ["RES-001", "-3"], ["RES-002", "0"]],
    )
    report = ResolutionReport()

    lines = read_structure(path, report)

    assert [(line.child, line.quantity) for line in lines] == [("RES-002", Decimal(0))]
    assert len(report.issues) == 1
    assert "RES-001" in report.issues[0]
    assert report.is_partial
