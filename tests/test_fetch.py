import pytest

from turbonav.bridge.fetch import FetchCoordinator, FetchFailure, FetchSuccess, is_success_status
from turbonav.models.location import Location
from turbonav.transport.base import FetchHandle, Transport


def _loc(n: int) -> Location:
    return Location(f"https://site/{n}")


def test_only_latest_fetch_completes_with_out_of_order_answers(transport):
    coordinator = FetchCoordinator(transport)
    results = []
    for n in range(3):
        coordinator.load(_loc(n), lambda result, n=n: results.append((n, result)))

    first, second, third = transport.requests
    # newest answers first, the stale ones straggle in afterwards
    third.respond(200, "<html>3</html>")
    first.respond(200, "<html>1</html>")
    second.respond(200, "<html>2</html>")

    assert results == [(2, FetchSuccess("<html>3</html>"))]


def test_stale_answer_after_new_load_is_suppressed_even_before_newest_answers(transport):
    coordinator = FetchCoordinator(transport)
    results = []
    coordinator.load(_loc(1), results.append)
    coordinator.load(_loc(2), results.append)

    transport.requests[0].respond(200, "old")
    assert results == []

    transport.requests[1].respond(200, "new")
    assert results == [FetchSuccess("new")]


def test_new_load_cancels_previous_handle(transport):
    coordinator = FetchCoordinator(transport)
    coordinator.load(_loc(1), lambda r: None)
    coordinator.load(_loc(2), lambda r: None)

    assert transport.requests[0].canceled
    assert not transport.requests[1].canceled
    assert coordinator.active.location == _loc(2)


def test_cancel_drops_completion(transport):
    coordinator = FetchCoordinator(transport)
    results = []
    coordinator.load(_loc(1), results.append)
    coordinator.cancel()

    transport.last.respond(200, "late")
    assert results == []
    assert not coordinator.in_flight
    assert transport.last.canceled


def test_completion_is_delivered_once(transport):
    coordinator = FetchCoordinator(transport)
    results = []
    coordinator.load(_loc(1), results.append)
    assert coordinator.in_flight

    transport.last.respond(200, "body")
    transport.last.respond(200, "body again")
    transport.last.fail("boom")

    assert results == [FetchSuccess("body")]
    assert not coordinator.in_flight


@pytest.mark.parametrize("status", [199, 300, 304, 404, 500])
def test_non_2xx_status_is_a_failure(transport, status):
    coordinator = FetchCoordinator(transport)
    results = []
    coordinator.load(_loc(1), results.append)
    transport.last.respond(status, "nope")

    assert results == [FetchFailure(f"HTTP {status}", status)]


def test_transport_error_is_a_failure(transport):
    coordinator = FetchCoordinator(transport)
    results = []
    coordinator.load(_loc(1), results.append)
    transport.last.fail("host unreachable")

    assert results == [FetchFailure("host unreachable")]


def test_undecodable_body_is_a_failure(transport):
    coordinator = FetchCoordinator(transport)
    results = []
    coordinator.load(_loc(1), results.append)
    transport.last.respond(200, b"\xff\xfe\xfa")

    assert len(results) == 1
    assert isinstance(results[0], FetchFailure)
    assert results[0].status == 200


def test_failures_of_superseded_fetches_are_suppressed_too(transport):
    coordinator = FetchCoordinator(transport)
    results = []
    coordinator.load(_loc(1), results.append)
    coordinator.load(_loc(2), results.append)

    transport.requests[0].fail("reset")
    transport.requests[0].respond(500, "")
    assert results == []


def test_transport_answering_synchronously():
    class ImmediateHandle(FetchHandle):
        canceled = False

        def cancel(self):
            self.canceled = True

    class ImmediateTransport(Transport):
        def get(self, url, on_response, on_error):
            on_response(200, f"<p>{url}</p>".encode())
            return ImmediateHandle()

    coordinator = FetchCoordinator(ImmediateTransport())
    results = []
    coordinator.load(_loc(7), results.append)

    assert results == [FetchSuccess("<p>https://site/7</p>")]
    assert not coordinator.in_flight


@pytest.mark.parametrize("status,expected", [(200, True), (204, True), (299, True), (300, False), (199, False)])
def test_success_status_range(status, expected):
    assert is_success_status(status) is expected
