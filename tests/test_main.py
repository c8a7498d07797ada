import os
import shutil
import tempfile
import unittest
from unittest.mock import patch
from click.testing import CliRunner
from alsabuild import config
from alsabuild.main import cli
from alsabuild.utils.pkg_config import Found, NotFound, ProbeFailed

NATIVE = "x86_64-unknown-linux-gnu"
ARMV7 = "armv7-unknown-linux-gnueabihf"


class CliTestCase(unittest.TestCase):

    def setUp(self):
        self.runner = CliRunner()
        self.test_dir = tempfile.mkdtemp()
        self.addCleanup(shutil.rmtree, self.test_dir)
        self.out_dir = os.path.join(self.test_dir, "out")

    def cargo_env(self, host=NATIVE, target=NATIVE):
        return {
            "CARGO_MANIFEST_DIR": self.test_dir,
            "OUT_DIR": self.out_dir,
            "HOST": host,
            "TARGET": target,
        }


@patch('alsabuild.utils.command_executor.SubprocessRunner.run', return_value=0)
class TestBuildCommand(CliTestCase):

    @patch('alsabuild.utils.pkg_config.probe', return_value=Found("/usr/lib", ("asound",), "1.2.10"))
    def test_system_alsa(self, mock_probe, mock_run):
        result = self.runner.invoke(cli, ["build"], env=self.cargo_env())
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("cargo:rustc-link-search=/usr/lib", result.output)
        self.assertIn("cargo:rustc-link-lib=asound", result.output)
        mock_run.assert_not_called()

    @patch('alsabuild.utils.pkg_config.probe', return_value=NotFound())
    def test_native_fallback(self, mock_probe, mock_run):
        result = self.runner.invoke(cli, ["build"], env=self.cargo_env())
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("cargo:warning=Could not find alsa at least v1.2 with pkg-config", result.output)
        lib_dir = os.path.join(self.out_dir, "install", "usr", "lib")
        self.assertIn(f"cargo:rustc-link-search={lib_dir}", result.output)
        self.assertIn("cargo:rustc-link-lib=atopology", result.output)
        self.assertEqual(mock_run.call_count, 8)

    @patch('alsabuild.utils.pkg_config.probe')
    def test_cross_build(self, mock_probe, mock_run):
        result = self.runner.invoke(cli, ["build"], env=self.cargo_env(target=ARMV7))
        self.assertEqual(result.exit_code, 0, result.output)
        mock_probe.assert_not_called()
        configure = [call for call in mock_run.call_args_list if call.args[0] == "sh"][0]
        self.assertIn("--host=arm-linux-gnueabihf", configure.args[1])
        self.assertEqual(configure.args[2], os.path.join(self.out_dir, "build"))
        self.assertTrue(os.path.isdir(os.path.join(self.out_dir, "install")))

    @patch('alsabuild.utils.pkg_config.probe')
    def test_options_override_environment(self, mock_probe, mock_run):
        env = self.cargo_env()
        result = self.runner.invoke(cli, ["build", "--target", ARMV7], env=env)
        self.assertEqual(result.exit_code, 0, result.output)
        mock_probe.assert_not_called()

    @patch('alsabuild.utils.pkg_config.probe', return_value=ProbeFailed("pkg-config exploded"))
    def test_probe_failure_exits_nonzero(self, mock_probe, mock_run):
        result = self.runner.invoke(cli, ["build"], env=self.cargo_env())
        self.assertEqual(result.exit_code, 1)
        self.assertIn("pkg-config exploded", result.output)
        self.assertNotIn("cargo:rustc-link", result.output)
        mock_run.assert_not_called()

    def test_missing_environment_exits_before_spawning(self, mock_run):
        env = self.cargo_env()
        env["OUT_DIR"] = None
        result = self.runner.invoke(cli, ["build"], env=env)
        self.assertEqual(result.exit_code, 1)
        self.assertIn("Environment variable not found: OUT_DIR", result.output)
        mock_run.assert_not_called()
        self.assertFalse(os.path.exists(self.out_dir))

    @patch('alsabuild.utils.pkg_config.probe')
    def test_failed_stage_exits_nonzero(self, mock_probe, mock_run):
        mock_run.side_effect = lambda program, args, cwd, extra_env=None: 2 if program == "make" else 0
        result = self.runner.invoke(cli, ["build"], env=self.cargo_env(target=ARMV7))
        self.assertEqual(result.exit_code, 1)
        self.assertIn("exit status 2", result.output)
        self.assertNotIn("cargo:rustc-link", result.output)

    @patch('alsabuild.utils.pkg_config.probe')
    def test_source_dir_from_config(self, mock_probe, mock_run):
        config.save_config({"alsa": {"source_dir": "vendor/alsa"}}, path=self.test_dir)
        result = self.runner.invoke(cli, ["build"], env=self.cargo_env(target=ARMV7))
        self.assertEqual(result.exit_code, 0, result.output)
        first = mock_run.call_args_list[0]
        self.assertEqual(first.args[0], "libtoolize")
        self.assertEqual(first.args[2], os.path.join(self.test_dir, "vendor/alsa"))


class TestOtherCommands(CliTestCase):

    def test_translate(self):
        result = self.runner.invoke(cli, ["translate", ARMV7])
        self.assertEqual(result.exit_code, 0)
        self.assertEqual(result.output.strip(), "arm-linux-gnueabihf")

    def test_translate_passthrough(self):
        result = self.runner.invoke(cli, ["translate", NATIVE])
        self.assertEqual(result.output.strip(), NATIVE)

    @patch('alsabuild.utils.pkg_config.probe', return_value=Found("/usr/lib64", ("asound", "m"), "1.2.10"))
    def test_probe_found(self, mock_probe):
        result = self.runner.invoke(cli, ["--path", self.test_dir, "probe"])
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("link-search: /usr/lib64", result.output)
        mock_probe.assert_called_once_with("alsa", "1.2", prefer_static=True)

    @patch('alsabuild.utils.pkg_config.probe', return_value=ProbeFailed("broken .pc file"))
    def test_probe_failure(self, mock_probe):
        result = self.runner.invoke(cli, ["--path", self.test_dir, "probe"])
        self.assertEqual(result.exit_code, 1)
        self.assertIn("broken .pc file", result.output)

    def test_config_set_and_get(self):
        result = self.runner.invoke(cli, ["--path", self.test_dir, "config", "set", "build.jobs", "4"])
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertEqual(config.load_config(path=self.test_dir), {"build": {"jobs": "4"}})

        result = self.runner.invoke(cli, ["--path", self.test_dir, "config", "get", "build.jobs"])
        self.assertEqual(result.exit_code, 0)
        self.assertIn("4", result.output)

    def test_config_set_rejects_invalid_value(self):
        result = self.runner.invoke(cli, ["--path", self.test_dir, "config", "set", "build.jobs", "lots"])
        self.assertEqual(result.exit_code, 1)
        self.assertEqual(config.load_config(path=self.test_dir), {})

    @patch('alsabuild.config.save_config', return_value=False)
    def test_config_set_fails_when_file_cannot_be_written(self, mock_save):
        result = self.runner.invoke(cli, ["--path", self.test_dir, "config", "set", "build.jobs", "4"])
        self.assertEqual(result.exit_code, 1)
        mock_save.assert_called_once()

    @patch('alsabuild.config.save_config', return_value=False)
    def test_config_unset_fails_when_file_cannot_be_written(self, mock_save):
        with open(os.path.join(self.test_dir, config.CONFIG_FILE), "w") as f:
            f.write('[alsa]\nmin_version = "1.2.8"\n')
        result = self.runner.invoke(cli, ["--path", self.test_dir, "config", "unset", "alsa.min_version"])
        self.assertEqual(result.exit_code, 1)

    def test_config_unset(self):
        config.save_config({"alsa": {"min_version": "1.2.8"}}, path=self.test_dir)
        result = self.runner.invoke(cli, ["--path", self.test_dir, "config", "unset", "alsa.min_version"])
        self.assertEqual(result.exit_code, 0)
        self.assertEqual(config.load_config(path=self.test_dir), {"alsa": {}})

    def test_clean_removes_scratch_trees(self):
        for subdir in ("build", "install/usr/lib"):
            os.makedirs(os.path.join(self.out_dir, subdir))
        result = self.runner.invoke(cli, ["clean", "--out-dir", self.out_dir])
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertFalse(os.path.exists(os.path.join(self.out_dir, "build")))
        self.assertFalse(os.path.exists(os.path.join(self.out_dir, "install")))
        self.assertTrue(os.path.isdir(self.out_dir))

    @patch('alsabuild.commands.doctor.shutil.which', return_value=None)
    def test_doctor_reports_missing_tools(self, mock_which):
        result = self.runner.invoke(cli, ["--path", self.test_dir, "doctor"])
        self.assertEqual(result.exit_code, 1)
        self.assertIn("autoconf was not found on PATH.", result.output)

    @patch('alsabuild.commands.doctor.shutil.which', side_effect=lambda tool: f"/usr/bin/{tool}")
    def test_doctor_ok(self, mock_which):
        os.makedirs(os.path.join(self.test_dir, "alsa-lib"))
        with open(os.path.join(self.test_dir, "alsa-lib", "configure.ac"), "w") as f:
            f.write("AC_INIT(alsa-lib, 1.2.10)\n")
        result = self.runner.invoke(cli, ["--path", self.test_dir, "doctor"])
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("Environment check completed successfully.", result.output)

if __name__ == "__main__":
    unittest.main()
