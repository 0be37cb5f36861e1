"""Command surface: success values and error strings, never exceptions."""
from __future__ import annotations

import pytest

from core.common.command_api import CommandAPI, CommandResult
from core.common.open_events import FileOpenBridge
from documents.models.loaded_pdf import LoadedPdf
from signature.models.stored_signature import StoredSignature


@pytest.fixture
def api(paths, config):
    return CommandAPI(paths=paths, config=config, bridge=FileOpenBridge())


def _sig(sig_id="s1"):
    return StoredSignature(id=sig_id, name="Initials", mime="image/png",
                           data=b"\x89PNG\r\n", natural_width=120, natural_height=40)


def test_fresh_install_loads_empty_collections(api):
    assert api.load_signatures() == CommandResult(ok=True, value=[])
    assert api.load_snippets() == CommandResult(ok=True, value=[])


def test_signatures_round_trip_through_commands(api):
    assert api.save_signatures([_sig("a"), _sig("b")]).ok
    result = api.load_signatures()
    assert result.ok
    assert [s.id for s in result.value] == ["a", "b"]


def test_save_signatures_accepts_wire_dicts(api):
    payload = [_sig().to_dict()]
    assert api.save_signatures(payload).ok
    assert api.load_signatures().value == [_sig()]
    assert [s.to_dict() for s in api.load_signatures().value] == payload


def test_save_signatures_rejects_bad_payload(api):
    result = api.save_signatures([{"id": "x", "name": "n"}])
    assert not result.ok
    assert "invalid signature payload" in result.error
    assert "mime" in result.error


def test_snippets_round_trip(api):
    assert api.save_snippets(["Lu et approuvé", "Bon pour accord"]).ok
    assert api.load_snippets().value == ["Lu et approuvé", "Bon pour accord"]


def test_unencodable_snippet_is_error_string(api):
    result = api.save_snippets(["ok", "\ud800"])
    assert not result.ok
    assert "cannot encode" in result.error
    assert api.load_snippets().value == []


def test_out_of_range_signature_is_error_string(api):
    assert api.save_signatures([_sig("a")]).ok
    too_wide = StoredSignature(id="b", name="B", mime="image/png", data=b"\x89PNG",
                               natural_width=2**32, natural_height=10)
    result = api.save_signatures([_sig("a"), too_wide])
    assert not result.ok
    assert [s.id for s in api.load_signatures().value] == ["a"]


def test_corrupt_file_surfaces_error_string(api, app_dirs):
    data_dir, _ = app_dirs
    data_dir.mkdir()
    (data_dir / "snippets.json").write_text('{"not": "a list"}', encoding="utf-8")
    result = api.load_snippets()
    assert not result.ok
    assert result.value is None
    assert "invalid JSON" in result.error


def test_export_to_downloads_returns_final_path(api, app_dirs):
    _, downloads = app_dirs
    (downloads / "doc.pdf").write_bytes(b"old")
    result = api.export_to_downloads(b"%PDF-new", "doc.pdf")
    assert result.ok
    assert result.value == str(downloads / "doc (1).pdf")
    assert (downloads / "doc.pdf").read_bytes() == b"old"


def test_save_and_load_document(api, tmp_path):
    target = tmp_path / "out.pdf"
    saved = api.save_document_at(b"%PDF-1.7", str(target))
    assert saved.ok and saved.value == str(target)
    loaded = api.load_document_from_path(str(target))
    assert loaded.value == LoadedPdf(data=b"%PDF-1.7", name="out.pdf")
    assert loaded.value.to_dict() == {"bytes": list(b"%PDF-1.7"), "name": "out.pdf"}


def test_load_missing_document_is_error_string(api, tmp_path):
    result = api.load_document_from_path(str(tmp_path / "nope.pdf"))
    assert not result.ok
    assert "cannot read" in result.error


def test_save_into_missing_directory_is_error_string(api, tmp_path):
    result = api.save_document_at(b"x", str(tmp_path / "no-dir" / "out.pdf"))
    assert not result.ok
    assert "cannot write" in result.error


def test_take_pending_open_paths(api, tmp_path):
    pdf = tmp_path / "launch.pdf"
    pdf.write_bytes(b"%PDF")
    api.bridge.run_startup([str(pdf)])
    assert api.take_pending_open_paths().value == [str(pdf)]
    assert api.take_pending_open_paths().value == []


def _png(size=(64, 24)):
    from io import BytesIO

    from PIL import Image

    buf = BytesIO()
    Image.new("RGBA", size).save(buf, format="PNG")
    return buf.getvalue()


def test_import_signature_image_appends(api):
    assert api.save_signatures([_sig("a")]).ok
    result = api.import_signature_image("Scan", _png())
    assert result.ok
    assert (result.value.mime, result.value.natural_width, result.value.natural_height) == ("image/png", 64, 24)
    assert [s.id for s in api.load_signatures().value] == ["a", result.value.id]


def test_import_signature_image_rejects_non_image(api):
    result = api.import_signature_image("Scan", b"not an image")
    assert not result.ok
    assert "not a readable image" in result.error
    assert api.load_signatures().value == []


def test_suggest_export_name(api):
    assert api.suggest_export_name("contract.PDF").value == "contract-signed.pdf"
