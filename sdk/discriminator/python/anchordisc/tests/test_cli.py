"""Command-line interface tests."""

import json
import logging
from pathlib import Path

import pytest

from anchordisc.cli import main
from anchordisc.discriminator import get_hash
from anchordisc.encoding import to_base64, to_byte_array, to_hex, to_prefixed_hex

FIXTURES_DIR = Path(__file__).resolve().parent.parent.parent.parent / "testdata" / "fixtures"
PUMP = str(FIXTURES_DIR / "pump_idl.json")
ORDERBOOK = str(FIXTURES_DIR / "orderbook_legacy_idl.json")

MY_NAME_BLOCK = [
    "namespace: global",
    "name: my_name",
    "hash: [181, 16, 140, 34, 85, 113, 210, 20] 0xb5108c225571d214",
    "b64: tRCMIlVx0hQ=",
]


@pytest.fixture(autouse=True)
def _reset_logging():
    yield
    logger = logging.getLogger("anchordisc")
    for h in logger.handlers[:]:
        logger.removeHandler(h)
    logger.setLevel(logging.NOTSET)


def _run(capsys, *argv: str) -> tuple[int, list[str], str]:
    code = main(list(argv))
    out, err = capsys.readouterr()
    return code, out.splitlines(), err


class TestGenerate:
    def test_generate(self, capsys):
        code, lines, _ = _run(capsys, "generate", "my_name")
        assert code == 0
        assert lines[:4] == MY_NAME_BLOCK
        assert lines[4].startswith("b58: ")

    def test_generate_custom_namespace(self, capsys):
        code, lines, _ = _run(capsys, "generate", "my_name", "-n", "my_namespace")
        assert code == 0
        assert lines[0] == "namespace: my_namespace"
        assert lines[2] == "hash: [183, 58, 214, 211, 174, 61, 243, 178] 0xb73ad6d3ae3df3b2"

    def test_generate_event_overrides_namespace(self, capsys):
        code, lines, _ = _run(capsys, "generate", "BuyEvent", "-e", "-n", "ignored")
        assert code == 0
        assert lines[0] == "namespace: event"
        assert lines[2] == "hash: [103, 244, 82, 31, 44, 245, 119, 119] 0x67f4521f2cf57777"

    def test_legacy_flags_before_subcommand_are_ignored(self, capsys):
        code, lines, _ = _run(capsys, "-e", "-n", "other", "generate", "BuyEvent")
        assert code == 0
        assert lines[0] == "namespace: global"
        assert lines[1] == "name: BuyEvent"
        disc = get_hash("global", "buy_event", False)
        assert lines[2] == f"hash: {to_byte_array(disc)} {to_prefixed_hex(disc)}"

    def test_verbose_logs_to_stderr(self, capsys):
        code, _, err = _run(capsys, "-v", "generate", "my_name")
        assert code == 0
        assert "hashing 'my_name'" in err


class TestLegacyMode:
    def test_bare_name(self, capsys):
        code, lines, _ = _run(capsys, "my_name")
        assert code == 0
        assert lines[:4] == MY_NAME_BLOCK

    def test_event_flag(self, capsys):
        code, lines, _ = _run(capsys, "-e", "BuyEvent")
        assert code == 0
        assert lines[0] == "namespace: event"
        assert lines[1] == "name: BuyEvent"

    def test_namespace_value_named_like_a_command(self, capsys):
        code, lines, _ = _run(capsys, "-n", "idl", "my_name")
        assert code == 0
        assert lines[0] == "namespace: idl"

    def test_no_arguments(self, capsys):
        code, lines, _ = _run(capsys)
        assert code == 0
        assert lines == ["No arguments provided. Use --help for usage information."]


class TestIdl:
    def test_list_all(self, capsys):
        code, lines, _ = _run(capsys, "idl", "-f", PUMP)
        assert code == 0
        assert lines[:5] == [
            "IDL Name: pump",
            "IDL Version: 0.1.0",
            "Found 6 instructions",
            "Found 3 events",
            "",
        ]
        assert lines[5] == "Instruction discriminators:"
        assert lines[6] == "-" * 80
        assert lines[7] == f"{'buy':<30} | 0x66063d1201daebea | {to_base64(bytes([102, 6, 61, 18, 1, 218, 235, 234]))}"
        assert "Event discriminators:" in lines
        assert len(lines) == 5 + 2 + 6 + 1 + 2 + 3

    def test_list_without_events(self, capsys, tmp_path):
        path = tmp_path / "idl.json"
        path.write_text(json.dumps({"name": "p", "instructions": [{"name": "ping"}]}))
        code, lines, _ = _run(capsys, "idl", "-f", str(path))
        assert code == 0
        assert "Event discriminators:" not in lines
        disc = get_hash("global", "ping", False)
        assert lines[-1] == f"{'ping':<30} | 0x{to_hex(disc)} | {to_base64(disc)}"

    def test_unknown_metadata(self, capsys):
        code, lines, _ = _run(capsys, "idl", "-f", str(FIXTURES_DIR / "anonymous_idl.json"))
        assert code == 0
        assert lines[0] == "IDL Name: Unknown"
        assert lines[1] == "IDL Version: Unknown"

    def test_single_instruction_uses_stored(self, capsys):
        code, lines, _ = _run(capsys, "idl", "-f", PUMP, "-i", "migrate")
        assert code == 0
        assert lines[5] == "Instruction: migrate"
        assert lines[6] == "namespace: global"
        assert lines[8] == "hash: [1, 2, 3, 4, 5, 6, 7, 8] 0x0102030405060708"

    def test_single_event(self, capsys):
        code, lines, _ = _run(capsys, "idl", "-f", ORDERBOOK, "--event", "OrderCreated")
        assert code == 0
        assert lines[5] == "Event: OrderCreated"
        assert lines[6] == "namespace: event"
        assert lines[8] == "hash: [224, 1, 229, 63, 254, 60, 190, 159] 0xe001e53ffe3cbe9f"

    def test_instruction_not_found(self, capsys):
        code, lines, err = _run(capsys, "idl", "-f", ORDERBOOK, "-i", "close")
        assert code == 1
        assert lines[5:] == [
            "Instruction 'close' not found in IDL",
            "Available instructions:",
            "  - initialize",
            "  - createOrder",
            "  - cancelOrder",
        ]
        assert "instruction not found" in err

    def test_event_not_found(self, capsys):
        code, lines, _ = _run(capsys, "idl", "-f", PUMP, "-e", "BuyEvent")
        assert code == 1
        assert lines[5:] == [
            "Event 'BuyEvent' not found in IDL",
            "Available events:",
            "  - CreateEvent",
            "  - TradeEvent",
            "  - CompleteEvent",
        ]

    def test_missing_file(self, capsys, tmp_path):
        code, lines, err = _run(capsys, "idl", "-f", str(tmp_path / "missing.json"))
        assert code == 1
        assert lines == []
        assert "failed to read IDL file" in err

    def test_malformed_json(self, capsys):
        code, _, err = _run(capsys, "idl", "-f", str(FIXTURES_DIR / "truncated_idl.json"))
        assert code == 1
        assert "failed to parse IDL JSON" in err

    def test_invalid_unicode_name(self, capsys, tmp_path):
        path = tmp_path / "idl.json"
        path.write_text(r'{"instructions": [], "events": [{"name": "Buy\ud800"}]}')
        code, lines, err = _run(capsys, "idl", "-f", str(path))
        assert code == 1
        assert lines == []
        assert err.startswith("error: ")
        assert "invalid unicode" in err

    def test_file_is_required(self, capsys):
        with pytest.raises(SystemExit) as exc:
            main(["idl"])
        assert exc.value.code == 2
