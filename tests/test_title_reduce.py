from vbcheck.title_reduce import (
    clean_author_name,
    clean_title,
    reduce_title,
    simplify_title,
)


def test_reduce_keeps_volume_bracket_drops_label():
    reduced = reduce_title("鬼滅の刃 (1) (少年ジャンプ)")
    assert reduced.cleaned_title.endswith("(1)")
    assert "少年ジャンプ" not in reduced.cleaned_title
    assert reduced.cleaned_title == "鬼滅の刃 (1)"
    assert reduced.simple_title == reduced.cleaned_title


def test_clean_title_bracket_styles():
    assert clean_title("ONE PIECE 105 (ジャンプコミックス)") == "ONE PIECE 105"
    assert clean_title("呪術廻戦 【特装版】 3巻") == "呪術廻戦 3巻"
    assert clean_title("Deep Learning [Kindle Edition]") == "Deep Learning"
    assert clean_title("チェンソーマン （ジャンプコミックスDIGITAL）") == "チェンソーマン"


def test_clean_title_keeps_numeric_and_volume_brackets():
    assert clean_title("ハイキュー!! （３巻）") == "ハイキュー!! （３巻）"
    assert clean_title("ブルーロック (3 巻) (講談社コミックス)") == "ブルーロック (3 巻)"
    assert clean_title("化物語 [1.5]") == "化物語 [1.5]"


def test_clean_title_strips_book_marker_and_whitespace():
    assert clean_title("嫌われる勇気: 本") == "嫌われる勇気"
    assert clean_title("  老人と海 \n 新潮文庫  ") == "老人と海 新潮文庫"


def test_clean_title_empty():
    assert clean_title("") == ""
    assert clean_title(None) == ""
    reduced = reduce_title("")
    assert reduced.cleaned_title == ""
    assert reduced.simple_title == ""


def test_simplify_title_cuts_at_first_separator():
    assert simplify_title("Python実践入門 ～言語の力を引き出す") == "Python実践入門"
    assert simplify_title("リーダブルコード －より良いコードを書く") == "リーダブルコード"
    assert simplify_title("統計学入門：基礎から") == "統計学入門"


def test_simplify_title_reattaches_trailing_volume():
    assert simplify_title("統計学入門: 基礎から応用まで 2") == "統計学入門 2"
    assert simplify_title("葬送のフリーレン - 北の地へ 12巻") == "葬送のフリーレン 12巻"


def test_simplify_title_volume_already_present():
    assert simplify_title("進撃の巨人 3 - 特別編 3") == "進撃の巨人 3"


def test_simplify_title_without_separator_is_identity():
    assert simplify_title("老人と海") == "老人と海"
    assert simplify_title("ONE PIECE 105") == "ONE PIECE 105"


def test_clean_author_name():
    assert clean_author_name("山田太郎 (著), 鈴木花子 (編集)") == "山田太郎"
    assert clean_author_name("著者：村上春樹、 他") == "村上春樹"
    assert clean_author_name("吾峠呼世晴（著）") == "吾峠呼世晴"
    assert clean_author_name("") == ""
    assert clean_author_name(None) == ""
