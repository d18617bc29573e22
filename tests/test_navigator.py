"""Tests for gophermech.navigator module."""

import re

import pytest

from gophermech.errors import (
    HistoryBoundaryError,
    ItemSaveError,
    NavigationError,
    NoCurrentItemError,
    NoMatchError,
    ProtocolError,
)
from gophermech.navigator import Navigator
from gophermech.types import ItemType, Request, Response

HOST = "example.org"
COMPUTERS = Request(HOST, 70, "/Computers")
ABOUT = Request(HOST, 70, "/about.txt", ItemType.TEXT_FILE)


class TestNavigate:
    def test_navigate_sets_state(self, navigator, collaborator, root_request):
        response = navigator.navigate(root_request)
        assert navigator.current_item is response
        assert navigator.history.entries == (root_request,)
        assert navigator.history.cursor == 0
        assert collaborator.fetch_count() == 1

    def test_navigate_url(self, navigator, root_request):
        navigator.navigate("gopher://example.org/1")
        assert navigator.request == root_request
        assert navigator.content() == b"root menu"

    def test_second_navigate_served_from_cache(self, navigator, collaborator, root_request):
        first = navigator.navigate(root_request)
        second = navigator.navigate(Request.from_url("Example.org"))
        assert second is first
        assert collaborator.fetch_count() == 1
        assert len(navigator.history) == 2

    def test_cache_disabled_fetches_every_time(self, collaborator, root_request):
        navigator = Navigator(collaborator, cache=False)
        navigator.navigate(root_request)
        navigator.navigate(root_request)
        assert collaborator.fetch_count() == 2

    def test_cache_disabled_still_stores(self, collaborator, root_request):
        navigator = Navigator(collaborator, cache=False)
        response = navigator.navigate(root_request)
        assert navigator.item_cache.retrieve(root_request.canonical_identity()) is response

    def test_toggle_cache(self, navigator, collaborator, root_request):
        navigator.cache_enabled = False
        navigator.navigate(root_request)
        navigator.navigate(root_request)
        navigator.cache_enabled = True
        navigator.navigate(root_request)
        assert collaborator.fetch_count() == 2

    def test_protocol_error_leaves_state_unchanged(self, navigator):
        missing = Request(HOST, 70, "/nowhere")
        with pytest.raises(NavigationError) as exc_info:
            navigator.navigate(missing)
        assert isinstance(exc_info.value.__cause__, ProtocolError)
        assert exc_info.value.request == missing
        assert navigator.history.is_empty()
        assert not navigator.has_current_item()
        assert len(navigator.item_cache) == 0

    def test_error_response_is_navigation_error(self, navigator, root_request):
        navigator.navigate(root_request)
        before = navigator.current_item
        with pytest.raises(NavigationError, match="does not exist"):
            navigator.navigate(Request(HOST, 70, "/broken"))
        assert navigator.current_item is before
        assert len(navigator.history) == 1
        assert not navigator.item_cache.is_cached(Request(HOST, 70, "/broken").canonical_identity())

    def test_bad_url(self, navigator):
        with pytest.raises(ValueError):
            navigator.navigate("http://example.org")


class TestSelectItem:
    def test_select_by_display(self, navigator, root_request):
        navigator.navigate(root_request)
        navigator.select_item("Computers")
        assert navigator.request == COMPUTERS
        assert navigator.history.entries == (root_request, COMPUTERS)
        assert navigator.history.cursor == 1

    def test_select_by_index_skips_inline_text(self, navigator, root_request):
        navigator.navigate(root_request)
        navigator.select_item(index=1)
        assert navigator.request == COMPUTERS

    def test_select_by_pattern(self, navigator, root_request):
        navigator.navigate(root_request)
        navigator.select_item(re.compile(r"^Ab"))
        assert navigator.request == ABOUT
        assert navigator.is_text()
        assert not navigator.is_menu()

    def test_select_by_fields(self, navigator, root_request):
        navigator.navigate(root_request)
        navigator.select_item(item_type=ItemType.GIF_IMAGE, host=HOST, port=70)
        assert navigator.content().startswith(b"GIF89a")

    def test_inline_text_never_selected(self, navigator, root_request):
        navigator.navigate(root_request)
        with pytest.raises(NoMatchError):
            navigator.select_item(re.compile("Welcome"))

    def test_empty_template_selects_first_item(self, navigator, root_request):
        navigator.navigate(root_request)
        navigator.select_item()
        assert navigator.request == COMPUTERS

    def test_no_match_leaves_state_unchanged(self, navigator, collaborator, root_request):
        root = navigator.navigate(root_request)
        with pytest.raises(NoMatchError):
            navigator.select_item("Horses")
        assert navigator.current_item is root
        assert len(navigator.history) == 1
        assert collaborator.fetch_count() == 1

    def test_select_before_navigate(self, navigator):
        with pytest.raises(NoCurrentItemError):
            navigator.select_item("Computers")

    def test_selectable_items(self, navigator, root_request):
        navigator.navigate(root_request)
        displays = [item.display for item in navigator.selectable_items()]
        assert displays == ["Computers", "About", "Cat picture", "Broken"]


class TestUpDown:
    def test_up_served_from_cache(self, navigator, collaborator, root_request):
        root = navigator.navigate(root_request)
        navigator.select_item("Computers")
        assert navigator.up() is root
        assert navigator.history.cursor == 0
        assert len(navigator.history) == 2
        assert collaborator.fetch_count() == 2

    def test_down_after_up(self, navigator, collaborator, root_request):
        navigator.navigate(root_request)
        computers = navigator.select_item("Computers")
        navigator.up()
        assert navigator.down() is computers
        assert navigator.history.cursor == 1
        assert collaborator.fetch_count() == 2

    def test_back_and_forward_aliases(self, navigator, root_request):
        navigator.navigate(root_request)
        navigator.select_item("Computers")
        navigator.back()
        assert navigator.request == root_request
        navigator.forward()
        assert navigator.request == COMPUTERS

    def test_up_at_top(self, navigator, root_request):
        navigator.navigate(root_request)
        with pytest.raises(HistoryBoundaryError):
            navigator.up()
        assert navigator.history.cursor == 0

    def test_down_at_bottom(self, navigator, root_request):
        navigator.navigate(root_request)
        with pytest.raises(HistoryBoundaryError):
            navigator.down()

    def test_up_before_navigate(self, navigator):
        with pytest.raises(HistoryBoundaryError):
            navigator.up()

    def test_up_refetches_without_cache(self, collaborator, root_request):
        navigator = Navigator(collaborator, cache=False)
        navigator.navigate(root_request)
        navigator.select_item("Computers")
        navigator.up()
        assert collaborator.fetch_count(root_request) == 2

    def test_failed_up_leaves_cursor(self, collaborator, pages, root_request):
        navigator = Navigator(collaborator, cache=False)
        navigator.navigate(root_request)
        computers = navigator.select_item("Computers")
        del pages[root_request.canonical_identity()]
        with pytest.raises(NavigationError):
            navigator.up()
        assert navigator.history.cursor == 1
        assert navigator.current_item is computers

    def test_select_after_up_drops_forward_branch(self, navigator, root_request):
        navigator.navigate(root_request)
        navigator.select_item("Computers")
        navigator.select_item("Software")
        navigator.up()
        navigator.up()
        navigator.select_item("About")
        assert navigator.history.entries == (root_request, ABOUT)
        with pytest.raises(HistoryBoundaryError):
            navigator.down()


class TestReload:
    def test_reload_always_fetches(self, navigator, collaborator, root_request):
        old = navigator.navigate(root_request)
        new = navigator.reload()
        assert collaborator.fetch_count() == 2
        assert new is not old
        assert navigator.current_item is new
        assert navigator.item_cache.retrieve(root_request.canonical_identity()) is new

    def test_reload_after_up_reloads_current(self, navigator, collaborator, root_request):
        navigator.navigate(root_request)
        navigator.select_item("Computers")
        navigator.up()
        navigator.reload()
        assert collaborator.fetches[-1] == root_request

    def test_reload_before_navigate(self, navigator):
        with pytest.raises(NoCurrentItemError):
            navigator.reload()

    def test_failed_reload_keeps_cache(self, navigator, pages, root_request):
        old = navigator.navigate(root_request)
        pages[root_request.canonical_identity()] = "3 server gone"
        with pytest.raises(NavigationError):
            navigator.reload()
        assert navigator.current_item is old
        assert navigator.item_cache.retrieve(root_request.canonical_identity()) is old


class TestForget:
    def test_forget_forces_fetch(self, navigator, collaborator, root_request):
        navigator.navigate(root_request)
        navigator.forget(root_request.canonical_identity())
        navigator.navigate(root_request)
        assert collaborator.fetch_count() == 2

    def test_forget_unknown(self, navigator):
        navigator.forget("gopher://nowhere:70/1")


class TestSaveItem:
    def test_save_text(self, navigator, root_request, tmp_path):
        navigator.navigate(root_request)
        navigator.select_item("About")
        target = navigator.save_item(tmp_path / "about.txt")
        assert target.read_bytes() == b"About this server\r\n"

    def test_save_binary(self, navigator, root_request, tmp_path):
        navigator.navigate(root_request)
        navigator.select_item("Cat picture")
        target = navigator.save_item(str(tmp_path / "cat.gif"))
        assert target.read_bytes() == b"GIF89a\x00\xff\x10binary"

    def test_save_text_keeps_raw_bytes(self, tmp_path):
        class LossyResponse(Response):
            def text(self) -> str:
                return self.body.decode("utf-8", errors="replace")

        class LossyCollaborator:
            def fetch(self, request):
                return LossyResponse(request, body=b"caf\xe9\r\n")

        navigator = Navigator(LossyCollaborator())
        navigator.navigate(ABOUT)
        target = navigator.save_item(tmp_path / "about.txt")
        assert target.read_bytes() == b"caf\xe9\r\n"

    def test_save_unwritable(self, navigator, root_request, tmp_path):
        navigator.navigate(root_request)
        with pytest.raises(ItemSaveError) as exc_info:
            navigator.save_item(tmp_path / "missing" / "menu.txt")
        assert isinstance(exc_info.value, OSError)

    def test_save_before_navigate(self, navigator, tmp_path):
        with pytest.raises(NoCurrentItemError):
            navigator.save_item(tmp_path / "x")


class TestAccessors:
    @pytest.mark.parametrize(
        "accessor",
        ["content", "text", "items", "is_success", "is_error", "is_menu", "is_text", "canonical_identity"],
    )
    def test_methods_before_navigate(self, navigator, accessor):
        with pytest.raises(NoCurrentItemError):
            getattr(navigator, accessor)()

    @pytest.mark.parametrize("prop", ["current_item", "request", "status", "error"])
    def test_properties_before_navigate(self, navigator, prop):
        with pytest.raises(NoCurrentItemError):
            getattr(navigator, prop)

    def test_pass_through(self, navigator, root_request):
        navigator.navigate(root_request)
        assert navigator.status == "+"
        assert navigator.error is None
        assert navigator.is_success()
        assert not navigator.is_error()
        assert navigator.is_menu()
        assert navigator.text() == "root menu"
        assert len(navigator.items()) == 5
        assert navigator.canonical_identity() == "gopher://example.org:70/1"

    def test_replace_collaborator(self, navigator, collaborator, pages, root_request):
        other = type(collaborator)(pages)
        navigator.collaborator = other
        navigator.navigate(root_request)
        assert navigator.collaborator is other
        assert other.fetch_count() == 1


class TestScenario:
    def test_root_computers_and_back(self, navigator, collaborator, root_request):
        root = navigator.navigate("example.org")
        assert navigator.history.entries == (root_request,)
        assert navigator.history.cursor == 0
        assert navigator.current_item is root

        computers = navigator.select_item("Computers")
        assert navigator.history.entries == (root_request, COMPUTERS)
        assert navigator.history.cursor == 1
        assert navigator.current_item is computers

        navigator.up()
        assert len(navigator.history) == 2
        assert navigator.history.cursor == 0
        assert navigator.current_item is root
        assert collaborator.fetch_count() == 2
