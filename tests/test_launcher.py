import io
import os
from pathlib import Path

import pytest
from rich.console import Console

from drun_src.launcher import (
    ContainerExitError,
    ContainerStartError,
    LaunchError,
    Launcher,
    ResolutionError,
)
from drun_src.models import InvocationRequest, Settings
from drun_src.process import SubprocessRunner, signal_name

from conftest import RecordingRunner, StubContext


class _NoUserContext(StubContext):
    def user(self):
        raise KeyError("getpwuid(): uid not found: 4242")


class _DeletedCwdContext(StubContext):
    def getcwd(self) -> str:
        raise FileNotFoundError(2, "No such file or directory")


def _launcher(context, runner=None, settings=None):
    output = Console(file=io.StringIO(), width=80)
    launcher = Launcher(
        context=context,
        settings=settings or Settings(),
        runner=runner or RecordingRunner(),
        output=output,
    )
    return launcher, output


@pytest.fixture
def project(tmp_path: Path) -> Path:
    (tmp_path / "src").mkdir()
    (tmp_path / "src" / "main.c").write_text("int main(void) { return 0; }\n")
    return tmp_path


def test_dry_run_prints_command_and_spawns_nothing(clean_env, project: Path):
    runner = RecordingRunner()
    launcher, output = _launcher(StubContext(cwd=str(project)), runner)
    request = InvocationRequest(image="gcc", command=["cc", "./src/main.c"], dry=True)

    assert launcher.launch(request) == 0
    assert runner.calls == []

    printed = output.file.getvalue()
    assert printed.count("\n") == 1
    assert printed.strip() == str(launcher.build(request))
    assert f"--volume {project}:{project}:rw" in printed
    assert f"--volume {project / 'src'}:{project / 'src'}:rw" in printed
    assert printed.strip().endswith("gcc cc ./src/main.c")


def test_file_argument_mounts_parent_not_file(clean_env, project: Path):
    launcher, _ = _launcher(StubContext(cwd=str(project)))
    argv = launcher.build(InvocationRequest(image="gcc", command=["./src/main.c"])).argv()
    src = str(project / "src")
    assert f"{src}:{src}:rw" in argv
    assert not any(arg.startswith(f"{src}/main.c") for arg in argv)


def test_execute_runs_docker_with_assembled_arguments(clean_env, project: Path):
    runner = RecordingRunner()
    launcher, output = _launcher(StubContext(cwd=str(project)), runner)
    request = InvocationRequest(image="alpine", command=["true"])

    assert launcher.launch(request) == 0
    assert runner.calls == [launcher.build(request).command_line()]
    assert runner.calls[0][:2] == ["docker", "run"]
    assert output.file.getvalue() == ""


def test_non_zero_status_raises_and_keeps_status(clean_env):
    launcher, _ = _launcher(StubContext(), RecordingRunner(status=3))
    with pytest.raises(ContainerExitError) as excinfo:
        launcher.launch(InvocationRequest(image="alpine"))
    assert excinfo.value.exit_code == 1
    assert excinfo.value.status == 3
    assert str(excinfo.value) == "exit status 3"


def test_missing_docker_executable_is_a_start_error(clean_env):
    runner = RecordingRunner(error=FileNotFoundError(2, "No such file", "docker"))
    launcher, _ = _launcher(StubContext(), runner)
    with pytest.raises(ContainerStartError) as excinfo:
        launcher.launch(InvocationRequest(image="alpine"))
    assert excinfo.value.exit_code == 1
    assert "cannot start docker" in str(excinfo.value)


def test_interrupt_while_waiting_exits_130(clean_env):
    launcher, _ = _launcher(StubContext(), RecordingRunner(error=KeyboardInterrupt()))
    assert launcher.launch(InvocationRequest(image="alpine")) == 130


def test_unknown_user_is_a_resolution_error(clean_env):
    launcher, _ = _launcher(_NoUserContext())
    with pytest.raises(ResolutionError, match="current user"):
        launcher.build(InvocationRequest(image="alpine"))


def test_deleted_working_directory_is_a_resolution_error(clean_env):
    runner = RecordingRunner()
    launcher, _ = _launcher(_DeletedCwdContext(), runner)
    with pytest.raises(ResolutionError, match="working directory"):
        launcher.launch(InvocationRequest(image="alpine", dry=True))
    assert runner.calls == []


@pytest.mark.parametrize("argument", ["/", "/definitely-not-a-dir/x/y"])
def test_argument_resolving_to_filesystem_root_is_refused(clean_env, argument: str):
    runner = RecordingRunner()
    launcher, output = _launcher(StubContext(), runner)
    request = InvocationRequest(image="alpine", command=["ls", argument], dry=True)
    with pytest.raises(ResolutionError, match="cannot mount /"):
        launcher.launch(request)
    assert runner.calls == []
    assert output.file.getvalue() == ""


def test_filesystem_root_as_working_directory_is_allowed(clean_env):
    launcher, _ = _launcher(StubContext(cwd="/"))
    argv = launcher.build(InvocationRequest(image="alpine")).argv()
    assert "/:/:rw" in argv


def test_build_without_image_is_a_launch_error(clean_env):
    launcher, _ = _launcher(StubContext())
    with pytest.raises(LaunchError, match="no image"):
        launcher.build(InvocationRequest(command=["true"]))


def test_echo_setting_reports_command_on_stderr(clean_env, capsys):
    launcher, output = _launcher(StubContext(), settings=Settings(echo=True))
    launcher.launch(InvocationRequest(image="alpine"))
    assert "Running: docker run" in capsys.readouterr().err
    assert output.file.getvalue() == ""


def test_subprocess_runner_returns_exit_status(tmp_path: Path):
    script = tmp_path / "exit3"
    script.write_text("#!/bin/sh\nexit 3\n")
    script.chmod(0o755)
    assert SubprocessRunner().run([str(script)]) == 3


def test_subprocess_runner_maps_signals(tmp_path: Path):
    script = tmp_path / "killed"
    script.write_text("#!/bin/sh\nkill -TERM $$\n")
    script.chmod(0o755)
    assert SubprocessRunner().run([str(script)]) == 143


def test_subprocess_runner_raises_for_missing_executable(tmp_path: Path):
    with pytest.raises(OSError):
        SubprocessRunner().run([str(tmp_path / "no-such-docker")])


@pytest.mark.parametrize(
    ("status", "expected"),
    [(1, "exit status 1"), (125, "exit status 125"), (137, "SIGKILL")],
)
def test_signal_name(status: int, expected: str):
    assert signal_name(status) == expected


def test_default_launcher_uses_host(clean_env, monkeypatch, project: Path):
    monkeypatch.chdir(project)
    launcher = Launcher(runner=RecordingRunner())
    assert launcher.resolve_workdir() == os.getcwd()
    assert launcher.resolve_user().uid == os.getuid()
