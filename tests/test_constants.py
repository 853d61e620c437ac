import os
import sys
from unittest import mock

import pytest

from fuzzyfind.constants import default_command


@pytest.mark.parametrize("platform", ["linux", "darwin", "freebsd13"])
def test_default_command_on_unix_uses_find(platform):
    with mock.patch.object(sys, "platform", platform):
        command = default_command()
    assert command.startswith("set -o pipefail; command find -L . -mindepth 1")
    assert command.endswith("| cut -b3-")
    assert "-fstype 'proc'" in command


def test_default_command_on_cygwin_wraps_in_sh():
    with mock.patch.object(sys, "platform", "win32"), mock.patch.dict(
        os.environ, {"TERM": "cygwin"}
    ):
        command = default_command()
    assert command.startswith('sh -c "command find -L . -mindepth 1')
    assert command.endswith('cut -b3-"')
    assert "fstype" not in command


def test_default_command_on_plain_windows_is_empty():
    env = {k: v for k, v in os.environ.items() if k != "TERM"}
    with mock.patch.object(sys, "platform", "win32"), mock.patch.dict(
        os.environ, env, clear=True
    ):
        assert default_command() == ""