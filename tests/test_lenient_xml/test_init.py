"""Test module for lenient_xml package initialization."""


def test_package_import() -> None:
    """Test that the package can be imported successfully."""
    # Arrange & Act
    import lenient_xml

    # Assert
    assert lenient_xml is not None


def test_package_has_version() -> None:
    """Test that the package has a version attribute."""
    # Arrange & Act
    import lenient_xml

    # Assert
    assert isinstance(lenient_xml.__version__, str)
    assert lenient_xml.__version__ == "0.1.0"


def test_package_exports_resolve() -> None:
    """Test that every name in __all__ exists on the package."""
    # Arrange & Act
    import lenient_xml

    # Assert
    for name in lenient_xml.__all__:
        assert hasattr(lenient_xml, name), name


def test_top_level_parse_round_trip() -> None:
    """Test the top-level functions work end to end."""
    # Arrange
    from lenient_xml import parse_string, render

    # Act
    result = parse_string("<a><b>x</b><c>y</c></a>")

    # Assert
    assert render(result.root) == "<a {}>\n  <b {}> 'x'\n  <c {}> 'y'"
