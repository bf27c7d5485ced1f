from __future__ import annotations

from models import Advocate
from services.session import SearchSession
from sources.base import AdvocateFetchError


class _FailingSource:
    source_name = "failing"

    def fetch(self):
        raise AdvocateFetchError("HTTP error! status: 500")


def _mounted(stub_source, scheduler, **kwargs):
    session = SearchSession(stub_source, scheduler, **kwargs)
    session.mount()
    return session


def test_mount_loads_full_set(stub_source, scheduler, advocates):
    session = _mounted(stub_source, scheduler)
    view = session.view()
    assert view.ready
    assert view.displayed == tuple(advocates)
    assert view.total == 4
    assert stub_source.calls == 1


def test_fetch_failure_sets_error_state(scheduler):
    session = SearchSession(_FailingSource(), scheduler)
    ctx = session.mount()
    view = session.view()
    assert ctx.error == "HTTP error! status: 500"
    assert view.error == "HTTP error! status: 500"
    assert not view.loading
    assert view.displayed == ()
    assert view.total == 0


def test_unexpected_source_exception_is_contained(scheduler):
    class _Broken:
        source_name = "broken"

        def fetch(self):
            raise ValueError("boom")

    session = SearchSession(_Broken(), scheduler)
    session.mount()
    assert session.error == "boom"


def test_input_ignored_until_ready(scheduler):
    session = SearchSession(_FailingSource(), scheduler)
    session.mount()
    session.on_input("anne")
    assert scheduler.timers == []
    assert session.query_text == ""


def test_query_text_echoes_immediately_results_wait(stub_source, scheduler, advocates):
    session = _mounted(stub_source, scheduler)
    session.on_input("garcia")
    assert session.view().query_text == "garcia"
    assert session.displayed == tuple(advocates)
    scheduler.advance(0.3)
    assert [a.last_name for a in session.displayed] == ["Garcia"]


def test_rapid_typing_dispatches_once(stub_source, scheduler, monkeypatch):
    session = _mounted(stub_source, scheduler)
    seen = []
    original = session.pipeline.resolve

    def _spy(text):
        seen.append(text)
        return original(text)

    monkeypatch.setattr(session.pipeline, "resolve", _spy)
    session.on_input("a")
    scheduler.advance(0.1)
    session.on_input("an")
    scheduler.advance(0.1)
    session.on_input("ana")
    scheduler.advance(0.3)
    assert seen == ["ana"]


def test_fuzzy_tolerance_shows_both_names(stub_source, scheduler):
    session = _mounted(stub_source, scheduler)
    session.on_input("an")
    scheduler.advance(0.3)
    names = {a.first_name for a in session.displayed}
    assert {"Anne", "Ana"} <= names


def test_reset_restores_original_order(stub_source, scheduler, advocates):
    session = _mounted(stub_source, scheduler)
    for text in ["an", "garcia", "zzzzqx", "reyes"]:
        session.on_input(text)
        scheduler.advance(0.3)
    session.on_input("pham")
    session.reset()
    scheduler.advance(1.0)
    assert session.displayed == tuple(advocates)
    assert session.view().query_text == ""


def test_teardown_cancels_pending_dispatch(stub_source, scheduler, advocates):
    session = _mounted(stub_source, scheduler)
    session.on_input("garcia")
    session.teardown()
    scheduler.advance(1.0)
    assert session.displayed == tuple(advocates)
    assert scheduler.active == []


def test_replacing_records_invalidates_previous_results(stub_source, scheduler, advocates):
    session = _mounted(stub_source, scheduler)
    session.on_input("garcia")
    scheduler.advance(0.3)
    assert [a.first_name for a in session.displayed] == ["Maria"]

    replacement = [Advocate.from_payload({"firstName": "Rosa", "lastName": "Garcia"})]
    session.replace_records(replacement)
    assert [a.first_name for a in session.displayed] == ["Rosa"]
    assert session.store.generation == 2


def test_pending_query_runs_against_new_records(stub_source, scheduler, advocates):
    session = _mounted(stub_source, scheduler)
    session.on_input("garcia")
    session.replace_records(advocates[:2])
    scheduler.advance(0.3)
    assert session.displayed == ()


def test_independent_sessions_do_not_share_state(stub_source, scheduler, advocates):
    first = _mounted(stub_source, scheduler)
    second = _mounted(stub_source, scheduler)
    first.on_input("garcia")
    scheduler.advance(0.3)
    assert len(first.displayed) == 1
    assert second.displayed == tuple(advocates)


def test_listeners_receive_each_frame(stub_source, scheduler):
    session = SearchSession(stub_source, scheduler)
    frames = []
    session.subscribe(frames.append)
    session.mount()
    session.on_input("reyes")
    scheduler.advance(0.3)
    session.reset()
    assert frames[0].loading is True
    assert frames[1].loading is False and len(frames[1].displayed) == 4
    assert [a.first_name for a in frames[2].displayed] == ["Ana"]
    assert frames[3].query_text == ""
