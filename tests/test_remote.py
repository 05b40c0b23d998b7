import datetime as dt
import json
import unittest
from unittest import mock

import requests

from weekplanner.core.exceptions import LoadFailure, SaveFailure
from weekplanner.core.models import PlannerSnapshot, Task
from weekplanner.core.week import compute_current_week
from weekplanner.storage.remote import RemoteSyncClient

WEEK = compute_current_week(dt.date(2024, 5, 29))
URL = "https://example.test/exec"


def _response(status=200, body=None, text=None):
    r = mock.Mock()
    r.status_code = status
    r.ok = 200 <= status < 400
    r.text = text if text is not None else json.dumps(body)
    if text is not None and body is None:
        r.json.side_effect = ValueError("Expecting value")
    else:
        r.json.return_value = body
    return r


class TestRemoteLoad(unittest.TestCase):
    def setUp(self) -> None:
        self.client = RemoteSyncClient(URL, WEEK, timeout=3)
        self.client.session = mock.Mock()

    def test_load_tasks_format(self) -> None:
        self.client.session.get.return_value = _response(body={
            "tasks": {"mon": [{"id": 1, "text": "Buy milk", "completed": False}]},
            "weekGoal": "g",
            "memo": "m",
        })
        snap = self.client.load()
        self.client.session.get.assert_called_once_with(URL, params={}, timeout=3)
        self.assertEqual(snap.tasks_by_day["mon"], [Task(1, "Buy milk")])
        self.assertEqual((snap.week_goal, snap.memo), ("g", "m"))

    def test_load_days_format_sends_week_start(self) -> None:
        client = RemoteSyncClient(URL, WEEK, wire_format="days")
        client.session = mock.Mock()
        client.session.get.return_value = _response(body={"daysData": []})
        client.load()
        self.assertEqual(client.session.get.call_args.kwargs["params"], {"weekStartDate": "2024-05-27"})

    def test_empty_payload_returns_none(self) -> None:
        self.client.session.get.return_value = _response(body=None)
        self.assertIsNone(self.client.load())
        self.client.session.get.return_value = _response(text="")
        self.assertIsNone(self.client.load())

    def test_transport_error_is_load_failure(self) -> None:
        self.client.session.get.side_effect = requests.ConnectionError("unreachable")
        with self.assertRaises(LoadFailure) as ctx:
            self.client.load()
        self.assertIsInstance(ctx.exception.__cause__, requests.ConnectionError)

    def test_bad_status_is_load_failure(self) -> None:
        self.client.session.get.return_value = _response(status=500, text="boom")
        with self.assertRaises(LoadFailure):
            self.client.load()

    def test_invalid_json_is_load_failure(self) -> None:
        self.client.session.get.return_value = _response(text="<html>login</html>")
        with self.assertRaises(LoadFailure):
            self.client.load()

    def test_overflowing_id_skips_only_that_task(self) -> None:
        payload = json.loads('{"tasks": {"mon": [{"id": 1e400, "text": "a"}, {"id": 2, "text": "b"}]}, "memo": "m"}')
        self.client.session.get.return_value = _response(body=payload, text="{...}")
        snap = self.client.load()
        self.assertEqual(snap.tasks_by_day["mon"], [Task(2, "b")])
        self.assertEqual(snap.memo, "m")

    def test_decode_errors_become_load_failure(self) -> None:
        self.client.session.get.return_value = _response(body={"tasks": {}})
        self.client.codec = mock.Mock()
        self.client.codec.load_params.return_value = {}
        self.client.codec.decode.side_effect = OverflowError("cannot convert float infinity to integer")
        with self.assertRaises(LoadFailure) as ctx:
            self.client.load()
        self.assertIsInstance(ctx.exception.__cause__, OverflowError)

    def test_non_object_json_is_load_failure(self) -> None:
        self.client.session.get.return_value = _response(body=[1, 2])
        with self.assertRaises(LoadFailure):
            self.client.load()


class TestRemoteSave(unittest.TestCase):
    def setUp(self) -> None:
        self.client = RemoteSyncClient(URL, WEEK, timeout=3)
        self.client.session = mock.Mock()

    def test_save_posts_json(self) -> None:
        snap = PlannerSnapshot(tasks_by_day={"mon": [Task(1, "a")]}, week_goal="g")
        self.client.save(snap)
        args, kwargs = self.client.session.post.call_args
        self.assertEqual(args, (URL,))
        self.assertEqual(kwargs["headers"], {"Content-Type": "application/json"})
        self.assertEqual(kwargs["timeout"], 3)
        body = json.loads(kwargs["data"])
        self.assertEqual(body["tasks"]["mon"], [{"id": 1, "text": "a", "completed": False}])
        self.assertEqual((body["weekGoal"], body["memo"]), ("g", ""))

    def test_save_ignores_response_status(self) -> None:
        self.client.session.post.return_value = _response(status=500, text="rejected")
        self.client.save(PlannerSnapshot.empty())  # does not raise

    def test_transport_error_is_save_failure(self) -> None:
        self.client.session.post.side_effect = requests.Timeout("slow")
        with self.assertRaises(SaveFailure):
            self.client.save(PlannerSnapshot.empty())


if __name__ == "__main__":
    unittest.main()
