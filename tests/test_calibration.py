import unittest
from unittest import mock

from hidrelay.mouse.calibration import CalibrationController
from hidrelay.mouse.config import cfg
from fakes import FakeExecutor, make_client


class TestCalibration(unittest.TestCase):
    def test_converges_to_device_ratio(self):
        """A device needing 1.25 units per pixel is learned to within 0.01."""
        executor = FakeExecutor(units_per_pixel=1.25)
        client = make_client(executor)
        factor = client.calibrate()
        self.assertAlmostEqual(factor, 1.25, delta=0.01)
        self.assertEqual(client.factor, factor)

    def test_converges_downward(self):
        executor = FakeExecutor(units_per_pixel=0.8)
        client = make_client(executor)
        self.assertAlmostEqual(client.calibrate(), 0.8, delta=0.01)

    def test_already_calibrated_device_keeps_factor(self):
        executor = FakeExecutor(units_per_pixel=1.0)
        client = make_client(executor)
        self.assertEqual(client.calibrate(), 1.0)
        # one probe per step size from 50 up to 0.4 * 600
        self.assertEqual(len(executor.requests), 240 - 50)

    def test_probes_head_toward_screen_centre(self):
        executor = FakeExecutor(units_per_pixel=1.0, cursor=(100, 500))
        client = make_client(executor)
        client.calibrate()
        first = executor.requests[0]
        self.assertEqual(
            first, {"method": "calibrate", "params": {"x": 50, "y": -50, "factor": 1.0}}
        )

    def test_only_calibrate_requests_are_sent(self):
        executor = FakeExecutor(units_per_pixel=1.1)
        make_client(executor).calibrate()
        self.assertEqual(set(executor.methods()), {"calibrate"})

    def test_tiny_screen_leaves_factor_alone(self):
        executor = FakeExecutor(width=100, height=100, cursor=(50, 50))
        client = make_client(executor)
        self.assertEqual(client.calibrate(), 1.0)
        self.assertEqual(executor.requests, [])

    def test_unresponsive_cursor_is_not_an_error(self):
        executor = FakeExecutor(height=140, cursor=(400, 70), frozen=True)
        client = make_client(executor)
        controller = CalibrationController(client, executor)
        with mock.patch.object(cfg, "CALIBRATION_MAX_PROBES", 5):
            with self.assertLogs("hidrelay.mouse.calibration", level="WARNING"):
                factor = controller.run()
        # steps 50..55, five undershooting probes each
        self.assertEqual(controller.probes, 30)
        self.assertAlmostEqual(factor, 1.03, places=6)
        self.assertEqual(client.factor, factor)

    def test_half_screen_escape(self):
        """A wildly overshooting device stops probing a step once it crosses half the screen."""
        executor = FakeExecutor(units_per_pixel=0.1)
        controller = CalibrationController(make_client(executor), executor)
        with mock.patch.object(cfg, "CALIBRATION_MAX_STEP_FRAC", 0.09):
            controller.run()
        # steps 50..53, each ends on its first probe
        self.assertEqual(controller.probes, 4)


if __name__ == "__main__":
    unittest.main()
