"""
Tests for on-disk upload storage.
"""

import io
import os

from werkzeug.datastructures import FileStorage

from services.upload_storage import UploadStorage


def make_upload(filename, payload=b"audio-bytes"):
    return FileStorage(stream=io.BytesIO(payload), filename=filename)


def test_save_sanitizes_and_prefixes_name(tmp_path):
    storage = UploadStorage(str(tmp_path), url_prefix="/static/uploads/")

    ok, url = storage.save(make_upload("../../etc/My Rain.MP3"))

    assert ok
    assert url.startswith("/static/uploads/")
    assert url.endswith("_My_Rain.MP3")
    assert ".." not in url
    assert os.listdir(tmp_path) == [os.path.basename(url)]


def test_rejects_disallowed_extension(tmp_path):
    storage = UploadStorage(str(tmp_path), allowed_extensions={"mp3"})

    ok, message = storage.save(make_upload("track.wav"))

    assert not ok
    assert "Allowed: mp3" in message


def test_remove_only_touches_own_urls(tmp_path):
    storage = UploadStorage(str(tmp_path))
    _, url = storage.save(make_upload("calm.ogg"))

    assert storage.remove("https://cdn.example.com/calm.ogg") is False
    assert storage.remove(url) is True
    assert os.listdir(tmp_path) == []
    assert storage.remove(url) is False
