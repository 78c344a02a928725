"""
test_driver.py - Frame-Ablauf und Zustandsmaschine
"""

import logging

import numpy as np
import pygame
import pytest

from lightsaber.driver import DriverState, FrameDriver
from conftest import TARGET_BGR, FakeVideoSource, make_frame


def test_start_sizes_canvas_to_camera(settings, two_point_frame):
    driver = FrameDriver(settings, FakeVideoSource([two_point_frame]))
    assert driver.state is DriverState.IDLE
    assert driver.start()
    assert driver.state is DriverState.RUNNING
    assert driver.canvas.get_size() == (5, 11)


def test_start_failure_is_terminal(settings, caplog):
    driver = FrameDriver(settings, FakeVideoSource([], fail_start=True))
    with caplog.at_level(logging.ERROR):
        assert not driver.start()
    assert driver.state is DriverState.ERROR
    assert "Kamera-Start fehlgeschlagen" in caplog.text
    assert driver.canvas is None
    with pytest.raises(RuntimeError):
        driver.tick()


def test_start_only_once(settings, two_point_frame):
    driver = FrameDriver(settings, FakeVideoSource([two_point_frame]))
    driver.start()
    with pytest.raises(RuntimeError):
        driver.start()


def test_tick_without_matches_draws_only_frame(settings):
    frame = np.full((6, 8, 3), (200, 30, 10), dtype=np.uint8)
    driver = FrameDriver(settings, FakeVideoSource([frame]))
    driver.start()
    detection = driver.tick()
    assert detection.points == []
    assert detection.center is None
    assert detection.tips is None
    assert driver.last_beam is None
    np.testing.assert_array_equal(driver.canvas.buffer[..., :3], frame[..., ::-1])
    assert (driver.canvas.buffer[..., 3] == 255).all()


def test_tick_two_pixels_draws_beam(settings, two_point_frame):
    driver = FrameDriver(settings, FakeVideoSource([two_point_frame]))
    driver.start()
    detection = driver.tick()
    assert detection.points == [(0, 0), (0, 10)]
    assert detection.center == (0, 5)
    assert detection.tips == ((0, 10), (0, 0))
    assert driver.last_beam.end == (0, -70)
    assert driver.canvas.buffer[5, 0, 0] > 200


def test_inspect_reads_captured_frame_not_beam(settings, two_point_frame):
    driver = FrameDriver(settings, FakeVideoSource([two_point_frame]))
    driver.start()
    assert driver.inspect_pixel(0, 0) is None
    driver.tick()
    b, g, r = TARGET_BGR
    assert driver.inspect_pixel(0, 0) == (r, g, b)
    assert driver.inspect_pixel(0, 5) == (0, 0, 0)
    assert driver.last_inspected == (0, 0, 0)


def test_snapshot_version_per_tick(settings):
    frames = [make_frame(4, 4) for _ in range(3)]
    driver = FrameDriver(settings, FakeVideoSource(frames))
    driver.start()
    for _ in range(3):
        driver.tick()
    assert driver.snapshots.latest().version == 3


def test_stop(settings, two_point_frame):
    source = FakeVideoSource([two_point_frame])
    driver = FrameDriver(settings, source)
    driver.start()
    driver.stop()
    assert source.stopped
    assert driver.state is DriverState.STOPPED


@pytest.fixture
def display():
    pygame.init()
    screen = pygame.display.set_mode((5, 11))
    yield screen
    pygame.quit()


def test_run_stops_on_quit(settings, two_point_frame, display):
    source = FakeVideoSource([two_point_frame])
    driver = FrameDriver(settings, source)
    driver.start()
    pygame.event.post(pygame.event.Event(pygame.QUIT))
    assert driver.run(display) is DriverState.STOPPED
    assert source.stopped


def test_run_ends_in_error_when_feed_breaks(settings, two_point_frame, display):
    settings.debug_overlay = True
    source = FakeVideoSource([two_point_frame])
    driver = FrameDriver(settings, source)
    driver.start()
    assert driver.run(display) is DriverState.ERROR
    assert driver.error == "Frame konnte nicht gelesen werden"
    assert driver.last_detection.tips == ((0, 10), (0, 0))
    assert source.stopped


def test_single_matching_pixel_draws_no_beam(settings):
    frame = make_frame(6, 6, points=[(2, 3)])
    driver = FrameDriver(settings, FakeVideoSource([frame]))
    driver.start()
    detection = driver.tick()
    assert detection.points == [(2, 3)]
    assert detection.tips is None
    assert driver.last_beam is None
    np.testing.assert_array_equal(driver.canvas.buffer[..., :3], frame[..., ::-1])


def test_run_ends_in_error_on_unreadable_frame(settings, display):
    # Zweikanal-Bild: cvtColor(BGR2RGBA) wirft cv2.error
    broken = np.zeros((11, 5, 2), dtype=np.uint8)
    source = FakeVideoSource([make_frame(5, 11), broken])
    driver = FrameDriver(settings, source)
    driver.start()
    source.frames.pop(0)
    assert driver.run(display) is DriverState.ERROR
    assert driver.error
    assert source.stopped


def test_error_outside_tick_is_marked_and_raised(settings, two_point_frame, display, monkeypatch):
    source = FakeVideoSource([two_point_frame])
    driver = FrameDriver(settings, source)
    driver.start()

    def broken_surface():
        raise MemoryError("kein Speicher")

    monkeypatch.setattr(driver.canvas, "to_surface", broken_surface)
    with pytest.raises(MemoryError):
        driver.run(display)
    assert driver.state is DriverState.ERROR
    assert source.stopped
