import os
import tempfile
import unittest

from PIL import Image

from hidrelay.keys import Key, MouseButton, is_reserved, key_for_char
from hidrelay.mouse import telemetry
from hidrelay.mouse.analysis import summarize_speeds
from hidrelay.mouse.controller import MouseController
from hidrelay.mouse.render import save_mouse_trajectory_jpeg
from hidrelay.mouse.telemetry import TrajectoryRecorder, set_trajectory_callback
from fakes import FakeExecutor, make_client


class TestTrajectoryTelemetry(unittest.TestCase):
    def setUp(self):
        self.executor = FakeExecutor(cursor=(0, 0))
        self.client = make_client(self.executor)

    def tearDown(self):
        set_trajectory_callback(None)

    def test_moves_are_recorded(self):
        self.client.linear_move(10, 4)
        moves = [(e.x, e.y) for e in self.client.recorder.moves()]
        self.assertEqual(moves, self.executor.moves)

    def test_summarize_speeds(self):
        self.assertEqual(summarize_speeds(TrajectoryRecorder()), "No move data")
        self.client.linear_move(30, 12)
        summary = summarize_speeds(self.client.recorder)
        self.assertIn("samples=29", summary)

    def test_render_jpeg_and_callback(self):
        seen = []
        set_trajectory_callback(seen.append)
        self.client.wind_move(500, 400)
        self.client.click()
        with tempfile.TemporaryDirectory() as tmp:
            outfile = os.path.join(tmp, "path.jpg")
            result = save_mouse_trajectory_jpeg(
                (800, 600), outfile, rec=self.client.recorder
            )
            self.assertEqual(result, outfile)
            with Image.open(outfile) as image:
                self.assertEqual(image.format, "JPEG")
                self.assertEqual(image.size, (800 + 40 + 80, 600 + 40))
        self.assertEqual([str(p) for p in seen], [outfile])

    def test_render_without_moves(self):
        with tempfile.TemporaryDirectory() as tmp:
            outfile = os.path.join(tmp, "empty.jpg")
            save_mouse_trajectory_jpeg((200, 100), outfile, rec=TrajectoryRecorder())
            self.assertTrue(os.path.exists(outfile))

    def test_recorder_reset(self):
        rec = TrajectoryRecorder()
        rec.log_move(1, 2)
        rec.reset()
        self.assertEqual(rec.events, [])

    def test_default_recorder_is_module_singleton(self):
        self.assertIsInstance(telemetry.recorder, TrajectoryRecorder)


class TestMouseController(unittest.TestCase):
    def setUp(self):
        self.executor = FakeExecutor(cursor=(10, 10))
        self.client = make_client(self.executor, seed=8)
        self.mouse = MouseController(self.client)

    def test_move_to_and_click(self):
        self.assertEqual(self.mouse.move_to(200, 150, click=True), (200, 150))
        self.assertEqual(self.executor.buttons, [("click", MouseButton.LEFT)])

    def test_straight_move(self):
        self.mouse.move_to(20, 14, humanize=False)
        self.assertEqual(len(self.executor.moves), 10)

    def test_drag_holds_and_releases(self):
        self.mouse.drag((50, 50), (300, 200), button=MouseButton.RIGHT)
        self.assertEqual(
            self.executor.buttons, [("hold", 2), ("unhold", 2)]
        )
        self.assertEqual(tuple(self.executor.cursor), (300, 200))

    def test_save_trajectory(self):
        self.mouse.move_to(100, 100)
        with tempfile.TemporaryDirectory() as tmp:
            outfile = self.mouse.save_trajectory(os.path.join(tmp, "t.jpg"))
            self.assertTrue(os.path.exists(outfile))
        self.assertIn("speed px/ms", self.mouse.summary())


class TestKeys(unittest.TestCase):
    def test_reserved_band(self):
        self.assertEqual(Key.RET, 0xB0)
        self.assertTrue(all(is_reserved(k) for k in Key))
        self.assertFalse(is_reserved(ord("a")))

    def test_key_for_char(self):
        self.assertEqual(key_for_char("A"), 65)
        self.assertEqual(key_for_char("\n"), Key.RET)
        self.assertIsNone(key_for_char("é"))
        with self.assertRaises(ValueError):
            key_for_char("ab")


if __name__ == "__main__":
    unittest.main()
