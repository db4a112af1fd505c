"""Tests for the upload form's view-state transitions."""

import pytest

from media_bridge.client import state as transitions
from media_bridge.client.state import SelectedFile, UploaderState
from media_bridge.config import MiB


def make_file(name="a.png", content_type="image/png", size=10):
    return SelectedFile(name=name, content_type=content_type, data=b"0" * size)


class TestSelectFile:
    def test_accepts_matching_type(self):
        file = make_file()
        state = transitions.select_file(UploaderState(), file)
        assert state.selected_file == file
        assert state.message.text == ""

    @pytest.mark.parametrize(
        "tab,content_type",
        [("image", "video/mp4"), ("image", "application/pdf"), ("video", "image/png")],
    )
    def test_rejects_wrong_type_and_keeps_previous(self, tab, content_type):
        previous = make_file(name="keep", content_type=f"{tab}/x")
        state = UploaderState(active_tab=tab, selected_file=previous)

        state = transitions.select_file(state, make_file(content_type=content_type))

        assert state.selected_file == previous
        assert state.message.kind == "error"

    @pytest.mark.parametrize("content_type", ["image/png", "video/mp4", "text/plain"])
    def test_rejects_oversize_regardless_of_type(self, content_type):
        state = UploaderState(active_tab="url")
        state = transitions.select_file(
            state, make_file(content_type=content_type, size=20 * MiB + 1)
        )
        assert state.selected_file is None
        assert state.message.text == "File size exceeds 20MB. Please use a smaller file."

    def test_exact_limit_accepted(self):
        state = transitions.select_file(UploaderState(), make_file(size=20 * MiB))
        assert state.selected_file is not None


class TestTransitions:
    def test_switch_tab_clears_selection(self):
        state = UploaderState(selected_file=make_file(), url="https://x", title="keep")
        state = transitions.switch_tab(state, "video")
        assert state.active_tab == "video"
        assert state.selected_file is None
        assert state.url == ""
        assert state.title == "keep"

    def test_modes_are_exclusive(self):
        state = UploaderState(selected_file=make_file())
        state = transitions.use_url_mode(state)
        assert state.use_external_url and state.selected_file is None

        state = transitions.edit(state, external_url="https://x/img.png")
        state = transitions.use_file_mode(state)
        assert not state.use_external_url and state.external_url == ""

    def test_state_is_immutable(self):
        state = UploaderState()
        with pytest.raises(Exception):
            state.title = "x"


class TestProblems:
    def ready(self, **fields):
        values = {"server_status": "connected", "title": "T", "selected_file": make_file()}
        values.update(fields)
        return UploaderState(**values)

    def test_ready_upload(self):
        assert transitions.upload_problem(self.ready()) is None

    def test_needs_connection(self):
        assert transitions.upload_problem(self.ready(server_status="offline")) == transitions.NOT_CONNECTED

    def test_needs_title(self):
        assert transitions.upload_problem(self.ready(title="")) == "Please enter a title for the page"

    def test_needs_payload_for_mode(self):
        assert transitions.upload_problem(self.ready(selected_file=None)) is not None
        assert transitions.upload_problem(self.ready(use_external_url=True, selected_file=None)) == (
            "Please enter an external URL"
        )
        assert transitions.upload_problem(
            self.ready(use_external_url=True, selected_file=None, external_url="https://x")
        ) is None

    def test_url_entry(self):
        state = UploaderState(server_status="connected", title="T", url="https://example.com")
        assert transitions.url_entry_problem(state) is None
        assert transitions.url_entry_problem(transitions.edit(state, url="")) == "Please enter a URL"
        assert transitions.url_entry_problem(transitions.edit(state, title="")) is not None


class TestResults:
    def test_upload_succeeded_clears_form(self):
        state = UploaderState(
            title="T", caption="c", selected_file=make_file(), external_url="u", uploading=True
        )
        state = transitions.upload_succeeded(state)
        assert (state.title, state.caption, state.external_url) == ("", "", "")
        assert state.selected_file is None
        assert not state.uploading
        assert state.message.kind == "success"

    def test_entries_failed_keeps_gallery(self):
        state = UploaderState(gallery_open=True, entries=())
        state = transitions.entries_failed(state, "boom")
        assert state.gallery_open
        assert state.message.text == "Failed to fetch pages: boom"


class TestMessages:
    def test_clear_message(self):
        state = transitions.with_message(UploaderState(), "error", "boom")
        state = transitions.clear_message(state)
        assert state.message.kind == ""
        assert state.message.text == ""

    def test_accepted_file_clears_earlier_error(self):
        state = transitions.with_message(UploaderState(), "error", "Please select a video file")
        state = transitions.select_file(state, make_file())
        assert state.message.text == ""

    def test_url_entry_needs_connection(self):
        state = UploaderState(server_status="offline", title="T", url="https://example.com")
        assert transitions.url_entry_problem(state) == transitions.NOT_CONNECTED
        assert transitions.url_entry_problem(transitions.edit(state, server_status="error")) == (
            transitions.NOT_CONNECTED
        )
