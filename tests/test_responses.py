"""Responses: tests for JSONResponse body and the HttpResponse writer."""

import io

from facet.core.responses import HttpResponse, JSONResponse, Response


def test_respond_writes_compact_json(capsys):
    HttpResponse().respond(JSONResponse({"asd": "asd"}))
    assert capsys.readouterr().out == '{"asd":"asd"}'


def test_respond_wraps_plain_payload():
    out = io.StringIO()
    writer = HttpResponse(out)
    writer.respond({"items": [1, 2], "name": "ñ"})
    assert out.getvalue() == '{"items":[1,2],"name":"ñ"}'
    assert writer.headers["Content-Type"] == "application/json"
    assert writer.status_code == 200


def test_respond_keeps_status_and_media_type():
    out = io.StringIO()
    writer = HttpResponse(out)
    writer.respond(Response("plain", media_type="text/plain", status_code=404))
    assert out.getvalue() == "plain"
    assert writer.headers["Content-Type"] == "text/plain"
    assert writer.status_code == 404


def test_to_starlette():
    response = JSONResponse({"ok": True}, status_code=201).to_starlette()
    assert response.body == b'{"ok":true}'
    assert response.status_code == 201
    assert response.media_type == "application/json"
