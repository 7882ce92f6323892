from canvastext.fonts import build_font_string, normalize_font_family, parse_font, register_fonts, resolve_font


def test_family_names_with_spaces_are_quoted():
    assert normalize_font_family("Font Awesome, Arial") == '"Font Awesome", Arial'
    assert normalize_font_family("'Already Quoted', sans-serif") == "'Already Quoted', sans-serif"


def test_build_font_string():
    assert build_font_string("normal", "normal", 12, "Arial") == "normal normal 12px Arial"
    assert build_font_string("italic", "small-caps", 12.5, "Arial") == "italic small-caps 12.5px Arial"


def test_parse_font():
    spec = parse_font('italic bold 16px "Font Awesome", Arial')

    assert spec.italic and spec.bold
    assert spec.size == 16
    assert spec.families == ("Font Awesome", "Arial")


def test_parse_font_round_trips_built_string():
    spec = parse_font(build_font_string("normal", "normal", 10, "Courier New, monospace"))

    assert not spec.bold and not spec.italic
    assert spec.families == ("Courier New", "monospace")


def test_resolve_builtin_faces():
    assert resolve_font(["Arial"]) == "Helvetica"
    assert resolve_font(["Arial"], bold=True) == "Helvetica-Bold"
    assert resolve_font(["serif"], italic=True) == "Times-Italic"
    assert resolve_font(["Courier"], bold=True, italic=True) == "Courier-BoldOblique"


def test_resolve_walks_family_list_then_falls_back():
    assert resolve_font(["No Such Font", "monospace"]) == "Courier"
    assert resolve_font(["No Such Font"]) == "Helvetica"


def test_register_fonts_in_empty_directory(tmp_path):
    assert register_fonts(tmp_path) == 0
