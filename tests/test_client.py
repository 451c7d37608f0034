import unittest

from hidrelay.device.client import RemoteDeviceClient
from hidrelay.device.codec import Method, ProtocolError
from hidrelay.device.transport import SerialTransport
from hidrelay.keys import Key, MouseButton
from fakes import FakeExecutor, make_client


class TestRemoteDeviceClient(unittest.TestCase):
    def setUp(self):
        self.executor = FakeExecutor()
        self.client = make_client(self.executor)

    def last(self):
        return self.executor.requests[-1]

    def test_call_returns_result(self):
        self.assertTrue(self.client.call(Method.PRESS, {"key": 65}))
        self.executor.result = "false"
        self.assertFalse(self.client.call(Method.PRESS, {"key": 65}))

    def test_keyboard_operations(self):
        self.client.press_key(Key.L_CTRL)
        self.assertEqual(self.last(), {"method": "press", "params": {"key": 0x80}})
        self.assertEqual(self.executor.held_keys, {0x80})
        self.client.release_key(Key.L_CTRL)
        self.assertEqual(self.last(), {"method": "release", "params": {"key": 0x80}})
        self.client.release_all_keys()
        self.assertEqual(self.last(), {"method": "releaseAll", "params": {}})
        self.client.write_key(ord("a"))
        self.assertEqual(self.last(), {"method": "write", "params": {"key": 97}})
        self.client.print_text("hi")
        self.assertEqual(self.last(), {"method": "print", "params": {"message": "hi"}})
        self.assertEqual(self.executor.text, "ahi")

    def test_print_line_appends_return_key(self):
        self.assertTrue(self.client.print_line("hello"))
        self.assertEqual(self.executor.methods(), ["print", "write"])
        self.assertEqual(self.last()["params"], {"key": 0xB0})
        self.assertEqual(self.executor.text, "hello\n")

    def test_mouse_buttons_default_to_left(self):
        self.client.click()
        self.client.hold(MouseButton.RIGHT)
        self.client.unhold(MouseButton.RIGHT)
        self.assertEqual(
            self.executor.buttons, [("click", 1), ("hold", 2), ("unhold", 2)]
        )
        kinds = [e.kind for e in self.client.recorder.events]
        self.assertEqual(kinds, ["click", "down", "up"])

    def test_move_sends_current_and_destination(self):
        self.client.move(120, 80)
        self.assertEqual(
            self.last(),
            {
                "method": "moveMouse",
                "params": {"a_x": 400, "a_y": 300, "b_x": 120, "b_y": 80},
            },
        )
        self.assertEqual(tuple(self.executor.cursor), (120, 80))

    def test_move_clamps_to_screen(self):
        self.client.move(1000, -5)
        self.assertEqual(self.last()["params"]["b_x"], 800)
        self.assertEqual(self.last()["params"]["b_y"], 0)

    def test_calibrate_step(self):
        self.client.calibrate_step(-50, 50, 1.5)
        self.assertEqual(
            self.last(),
            {"method": "calibrate", "params": {"x": -50, "y": 50, "factor": 1.5}},
        )

    def test_back_to_back_calls_never_interleave(self):
        """Each response is consumed before the next request is written."""
        self.client.press_key(65)
        self.assertEqual(self.executor.pending, 0)
        self.client.release_key(65)
        self.assertEqual(self.executor.pending, 0)
        self.assertEqual(len(self.executor.wire), 2)
        self.assertTrue(self.executor.wire[0].endswith(b"}"))

    def test_bad_response_is_protocol_error(self):
        self.executor.result = '"maybe"'
        with self.assertRaises(ProtocolError):
            self.client.write_key(65)

    def test_factor_must_stay_positive(self):
        self.assertEqual(self.client.factor, 1.0)
        self.client.factor = 1.3
        self.assertEqual(self.client.factor, 1.3)
        for bad in (0, -1.0):
            with self.assertRaises(ValueError):
                self.client.factor = bad
        self.assertEqual(self.client.factor, 1.3)

    def test_sleep_ms_uses_injected_sleep(self):
        self.client.sleep_ms(250)
        self.client.sleep_ms(0)
        self.assertEqual(self.executor.sleeps, [0.25])

    def test_context_manager_closes_transport(self):
        with self.client as client:
            client.press_key(65)
        self.assertFalse(self.executor.is_open)

    def test_echoing_link_yields_protocol_error(self):
        """A loopback echoes the request, whose nested params end the frame early."""
        transport = SerialTransport("loop://").open()
        client = RemoteDeviceClient(transport, FakeExecutor())
        try:
            with self.assertRaises(ProtocolError):
                client.press_key(65)
        finally:
            client.close()


if __name__ == "__main__":
    unittest.main()
