import threading

import httpx

from weatherbar.controller import WeatherController
from weatherbar.dispatch import ImmediateDispatcher, QueueDispatcher
from weatherbar.settings import LOCATION_KEY, MemorySettings
from weatherclient.client import WeatherClient
from weatherclient.config import WeatherSettings
from weatherclient.errors import UnexpectedStatusError


def payload(name, temp=55.5):
    return {"name": name, "main": {"temp": temp}, "weather": [{"main": "Clouds", "icon": "04d"}]}


class DummyRenderer:
    def __init__(self):
        self.snapshots = []
        self.threads = []

    def update(self, snapshot):
        self.snapshots.append(snapshot)
        self.threads.append(threading.current_thread())


def make_controller(handler, settings=None, dispatcher=None, **kwargs):
    client = WeatherClient(
        WeatherSettings(api_key='k', base_url='http://weather.test/weather'),
        http_client=httpx.Client(transport=httpx.MockTransport(handler)),
    )
    renderer = DummyRenderer()
    controller = WeatherController(
        client=client,
        settings=settings if settings is not None else MemorySettings(),
        renderer=renderer,
        dispatcher=dispatcher or QueueDispatcher(),
        default_location='Seattle, WA',
        **kwargs,
    )
    return controller, renderer


def echo_handler(queries):
    def handler(request):
        q = request.url.params['q']
        queries.append(q)
        return httpx.Response(200, json=payload(q.split(',')[0]))
    return handler


def test_unset_location_falls_back_to_default():
    queries = []
    controller, renderer = make_controller(echo_handler(queries), dispatcher=ImmediateDispatcher())
    controller.refresh().result(timeout=5)
    controller.client.close()
    assert queries == ['Seattle, WA']
    assert [s.location_name for s in renderer.snapshots] == ['Seattle']


def test_configured_location_is_used():
    queries = []
    settings = MemorySettings({LOCATION_KEY: 'Portland, OR'})
    controller, renderer = make_controller(echo_handler(queries), settings=settings, dispatcher=ImmediateDispatcher())
    controller.refresh().result(timeout=5)
    controller.client.close()
    assert queries == ['Portland, OR']


def test_render_runs_on_ui_thread_only():
    dispatcher = QueueDispatcher()
    controller, renderer = make_controller(echo_handler([]), dispatcher=dispatcher)
    result = controller.refresh().result(timeout=5)
    assert result.ok
    # delivered by the worker, but not rendered until the UI loop drains
    assert renderer.snapshots == []
    assert dispatcher.run_pending() == 1
    controller.client.close()
    assert renderer.snapshots == [result.snapshot]
    assert renderer.threads == [threading.current_thread()]


def test_two_sequential_refreshes_render_identical_snapshots():
    dispatcher = QueueDispatcher()
    controller, renderer = make_controller(echo_handler([]), dispatcher=dispatcher)
    controller.refresh().result(timeout=5)
    dispatcher.run_pending()
    controller.refresh().result(timeout=5)
    dispatcher.run_pending()
    controller.client.close()
    assert len(renderer.snapshots) == 2
    assert renderer.snapshots[0] == renderer.snapshots[1]


def test_failure_keeps_previous_panel_and_reports():
    failures = []
    status = {'code': 200}

    def handler(request):
        if status['code'] != 200:
            return httpx.Response(status['code'])
        return httpx.Response(200, json=payload('Seattle'))

    controller, renderer = make_controller(handler, dispatcher=ImmediateDispatcher(), on_failure=failures.append)
    controller.refresh().result(timeout=5)
    status['code'] = 500
    result = controller.refresh().result(timeout=5)
    controller.client.close()
    assert not result.ok
    assert [s.location_name for s in renderer.snapshots] == ['Seattle']
    assert len(failures) == 1
    assert isinstance(failures[0], UnexpectedStatusError)


def _overlapping_refreshes(supersede_stale):
    """First refresh (Slowtown) completes after the second (Fasttown)."""
    release = threading.Event()

    def handler(request):
        q = request.url.params['q']
        if q == 'Slowtown':
            release.wait(timeout=5)
        return httpx.Response(200, json=payload(q))

    settings = MemorySettings({LOCATION_KEY: 'Slowtown'})
    dispatcher = QueueDispatcher()
    controller, renderer = make_controller(handler, settings=settings, dispatcher=dispatcher,
                                           supersede_stale=supersede_stale)
    slow = controller.refresh()
    settings.set(LOCATION_KEY, 'Fasttown')
    fast = controller.refresh()
    fast.result(timeout=5)
    release.set()
    slow.result(timeout=5)
    dispatcher.run_pending()
    controller.client.close()
    return [s.location_name for s in renderer.snapshots]


def test_overlapping_refreshes_last_arrival_wins():
    # no coordination: the stale response lands last and stays on screen
    assert _overlapping_refreshes(supersede_stale=False) == ['Fasttown', 'Slowtown']


def test_supersede_stale_drops_older_refresh():
    assert _overlapping_refreshes(supersede_stale=True) == ['Fasttown']
