import unittest

import fluxclient


class TestVersion(unittest.TestCase):
    def test_version(self):
        version = fluxclient.__version__
        print(version)
        self.assertTrue(version.startswith("0"))

    def test_user_agent_carries_version(self):
        options = fluxclient.Options()
        self.assertTrue(options.user_agent.startswith(f"fluxclient/{fluxclient.__version__}"))
