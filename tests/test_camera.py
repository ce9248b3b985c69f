import unittest

import numpy as np

from gravity_sandbox.render.camera import Camera


class TestCamera(unittest.TestCase):

    def setUp(self):
        self.camera = Camera((800, 600), 2.0, min_ppm=0.01, max_ppm=20.0)

    def test_center_maps_to_screen_center(self):
        self.camera.follow(np.array([150.0, -40.0]))
        self.assertEqual(self.camera.world_to_screen(150.0, -40.0), (400, 300))

    def test_world_y_points_up(self):
        sx, sy = self.camera.world_to_screen(10.0, 10.0)
        self.assertEqual((sx, sy), (420, 280))

    def test_screen_to_world_inverts(self):
        self.camera.follow(np.array([1_000.0, 500.0]))
        sx, sy = self.camera.world_to_screen(1_060.0, 430.0)
        x, y = self.camera.screen_to_world(sx, sy)
        self.assertAlmostEqual(x, 1_060.0)
        self.assertAlmostEqual(y, 430.0)

    def test_zoom_is_clamped(self):
        self.camera.zoom_by_factor(1_000.0)
        self.assertEqual(self.camera.ppm, 20.0)
        self.camera.set_zoom(0.0)
        self.assertEqual(self.camera.ppm, 0.01)

    def test_many_points_match_single_transform(self):
        self.camera.follow(np.array([3.0, 7.0]))
        points = np.array([[0.0, 0.0], [12.5, -3.0], [-80.0, 44.0]])
        expected = [self.camera.world_to_screen(x, y) for x, y in points]
        self.assertEqual(self.camera.world_to_screen_many(points), expected)

    def test_view_rect_spans_the_window(self):
        x0, y0, x1, y1 = self.camera.view_rect()
        self.assertAlmostEqual(x1 - x0, 400.0)
        self.assertAlmostEqual(y1 - y0, 300.0)
        self.assertEqual(self.camera.scale_length(10.0), 20)


if __name__ == '__main__':
    unittest.main()
