"""
Tests for cli -- blinkers command-line interface argument parsing and dispatch.

Tests cover:
- main() with no args (prints help, returns 0)
- --version flag
- Subcommand dispatch (count, list, off, color, rgb, version, config)
- send_color() name validation and Fade/Immediate choice
- _broadcast() with no devices and with errors
- configure() persistence
"""

import os
import tempfile
import unittest
from unittest.mock import MagicMock, patch

from blinkers import cli
from blinkers.color import Color
from blinkers.conf import settings
from blinkers.errors import TransportError
from blinkers.message import Fade, GetVersion, Immediate, Off


class TestMainEntryPoint(unittest.TestCase):
    """Test main() CLI dispatch."""

    def test_no_args_prints_help(self):
        with patch('sys.argv', ['blinkers']):
            self.assertEqual(cli.main(), 0)

    def test_version_flag(self):
        with patch('sys.argv', ['blinkers', '--version']):
            self.assertEqual(cli.main(), 0)

    def test_bad_args(self):
        with patch('sys.argv', ['blinkers', 'rgb', 'red']):
            self.assertEqual(cli.main(), 2)

    def test_count_dispatches(self):
        with patch('sys.argv', ['blinkers', 'count']), \
             patch.object(cli, 'count', return_value=0) as mock_count:
            self.assertEqual(cli.main(), 0)
            mock_count.assert_called_once_with()

    def test_off_dispatches(self):
        with patch('sys.argv', ['blinkers', 'off']), \
             patch.object(cli, 'send_off', return_value=0) as mock_off:
            cli.main()
            mock_off.assert_called_once_with()

    def test_color_dispatches(self):
        with patch('sys.argv', ['blinkers', 'color', 'red', '--fade', '500']), \
             patch.object(cli, 'send_color', return_value=0) as mock_color:
            cli.main()
            mock_color.assert_called_once_with('red', fade=500, led=None)

    def test_rgb_dispatches(self):
        with patch('sys.argv', ['blinkers', '-v', 'rgb', '1', '2', '3', '--led', '2']), \
             patch.object(cli, 'send_rgb', return_value=0) as mock_rgb:
            cli.main()
            mock_rgb.assert_called_once_with(1, 2, 3, fade=None, led=2)

    def test_config_dispatches(self):
        with patch('sys.argv', ['blinkers', 'config', '--timeout', '300']), \
             patch.object(cli, 'configure', return_value=0) as mock_cfg:
            cli.main()
            mock_cfg.assert_called_once_with(timeout=300, fade=None)


class TestColorCommands(unittest.TestCase):
    """send_color() / send_rgb() message construction."""

    def setUp(self):
        p = patch.object(cli, '_broadcast', return_value=0)
        self.broadcast = p.start()
        self.addCleanup(p.stop)
        f = patch.object(settings, 'fade_ms', 0)
        f.start()
        self.addCleanup(f.stop)

    def test_immediate_without_fade(self):
        self.assertEqual(cli.send_color('red'), 0)
        self.broadcast.assert_called_once_with(Immediate(Color(255, 0, 0), None))

    def test_fade(self):
        cli.send_color('Blue', fade=400, led=1)
        self.broadcast.assert_called_once_with(Fade(Color(0, 0, 255), 400, 1))

    def test_fade_from_settings(self):
        with patch.object(settings, 'fade_ms', 250):
            cli.send_color('green')
        self.broadcast.assert_called_once_with(Fade(Color(0, 255, 0), 250, None))

    def test_explicit_zero_fade_overrides_settings(self):
        with patch.object(settings, 'fade_ms', 250):
            cli.send_rgb(1, 2, 3, fade=0)
        self.broadcast.assert_called_once_with(Immediate(Color(1, 2, 3), None))

    def test_unknown_color(self):
        self.assertEqual(cli.send_color('mauve-ish'), 1)
        self.broadcast.assert_not_called()

    def test_rgb_out_of_range(self):
        self.assertEqual(cli.send_rgb(300, 0, 0), 1)
        self.broadcast.assert_not_called()

    def test_off(self):
        cli.send_off()
        self.broadcast.assert_called_once_with(Off())

    def test_version_request(self):
        cli.request_version()
        self.broadcast.assert_called_once_with(GetVersion())


class TestBroadcast(unittest.TestCase):
    """_broadcast() against a mocked Blinkers."""

    def _patch_blinkers(self, count=2, send=16):
        instance = MagicMock()
        instance.device_count.return_value = count
        if isinstance(send, Exception):
            instance.send.side_effect = send
        else:
            instance.send.return_value = send
        return patch('blinkers.driver.Blinkers', return_value=instance), instance

    def test_sends(self):
        p, instance = self._patch_blinkers()
        with p:
            self.assertEqual(cli.send_off(), 0)
        instance.send.assert_called_once_with(Off())

    def test_no_devices(self):
        p, instance = self._patch_blinkers(count=0)
        with p:
            self.assertEqual(cli.send_off(), 1)
        instance.send.assert_not_called()

    def test_transport_error(self):
        p, _ = self._patch_blinkers(send=TransportError("Resource busy"))
        with p:
            self.assertEqual(cli.send_color('red'), 1)

    def test_count(self):
        p, _ = self._patch_blinkers(count=3)
        with p, patch('builtins.print') as mock_print:
            self.assertEqual(cli.count(), 0)
        mock_print.assert_called_once_with(3)

    def test_list_empty(self):
        p, instance = self._patch_blinkers()
        instance.devices.return_value = []
        with p:
            self.assertEqual(cli.list_devices(), 1)


class TestConfigure(unittest.TestCase):
    """configure() writes through the settings singleton."""

    def test_persists(self):
        with tempfile.TemporaryDirectory() as tmp:
            config_dir = os.path.join(tmp, 'blinkers')
            config_path = os.path.join(config_dir, 'config.json')
            with patch('blinkers.conf.CONFIG_DIR', config_dir), \
                 patch('blinkers.conf.CONFIG_PATH', config_path), \
                 patch.object(settings, 'timeout_ms', settings.timeout_ms), \
                 patch.object(settings, 'fade_ms', settings.fade_ms):
                self.assertEqual(cli.configure(timeout=300, fade=100), 0)
                self.assertEqual(settings.timeout_ms, 300)
                self.assertEqual(settings.fade_ms, 100)
                self.assertTrue(os.path.exists(config_path))

    def test_invalid(self):
        with patch.object(settings, 'set_timeout', side_effect=ValueError("bad")):
            self.assertEqual(cli.configure(timeout=0), 1)
