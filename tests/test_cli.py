"""Tests for CLI."""

import pytest

from passph import cli
from passph.cli import WORDLIST_CHOICES, create_parser, run_generate_cli, wordlist_slug
from passph.wordlists import CATALOG, LoadReport, Wordlist, WordlistId, WordlistRegistry

from conftest import TEST_WORDS


@pytest.fixture
def loaded(monkeypatch) -> list[dict]:
    """Replace the download with the test words; records each call."""
    calls: list[dict] = []

    async def fake_load_catalog(catalog, *, base_url, **kwargs):
        calls.append({"catalog": list(catalog), "base_url": base_url})
        return LoadReport(
            WordlistRegistry(
                Wordlist.from_entry(entry, base_url).with_words(TEST_WORDS[int(entry.id)])
                for entry in catalog
            )
        )

    monkeypatch.setattr(cli, "load_catalog", fake_load_catalog)
    return calls


def test_wordlist_slugs():
    assert wordlist_slug(CATALOG[3]) == "dice-short-1"
    assert sorted(WORDLIST_CHOICES) == ["bip39", "dice-long", "dice-short-1", "dice-short-2", "wordle"]


def test_parser_defaults():
    args = create_parser().parse_args([])
    assert args.words == 3
    assert args.separator == "-"
    assert args.wordlist == "bip39"
    assert args.count == 1


def test_generate_defaults(loaded: list[dict], capsys) -> None:
    assert run_generate_cli([]) == 0

    out = capsys.readouterr().out.strip()
    words = out.split("-")
    assert len(words) == 3
    assert set(words) <= set(TEST_WORDS[WordlistId.BIP39])
    assert [entry.id for entry in loaded[0]["catalog"]] == [WordlistId.BIP39]


def test_generate_with_options(loaded: list[dict], capsys) -> None:
    code = run_generate_cli(
        ["-n", "5", "-s", "=", "-l", "dice-short-1", "-c", "4", "--base-url", "https://lists.test"]
    )

    assert code == 0
    lines = capsys.readouterr().out.splitlines()
    assert len(lines) == 4
    for line in lines:
        words = line.split("=")
        assert len(words) == 5
        assert set(words) <= set(TEST_WORDS[WordlistId.DICE_SHORT1])
    assert loaded[0]["base_url"] == "https://lists.test"


def test_generate_space_separator(loaded: list[dict], capsys) -> None:
    assert run_generate_cli(["-s", "\\"]) == 0
    assert len(capsys.readouterr().out.split()) == 3


@pytest.mark.parametrize(
    "argv",
    [["-n", "0"], ["-n", "201"], ["-c", "0"], ["-s", "toolongsep"], ["-l", "klingon"]],
)
def test_invalid_arguments(loaded: list[dict], argv: list[str]) -> None:
    with pytest.raises(SystemExit) as exc:
        run_generate_cli(argv)

    assert exc.value.code == 2
    assert loaded == []


def test_download_failure(monkeypatch, capsys) -> None:
    async def failing_load_catalog(catalog, *, base_url, **kwargs):
        catalog = list(catalog)
        registry = WordlistRegistry(Wordlist.from_entry(entry, base_url) for entry in catalog)
        return LoadReport(registry, {catalog[0].id: "HTTP 404 for bip39_dictionary.json"})

    monkeypatch.setattr(cli, "load_catalog", failing_load_catalog)

    assert run_generate_cli([]) == 1
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "HTTP 404" in captured.err
