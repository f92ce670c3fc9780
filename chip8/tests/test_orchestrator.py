from __future__ import annotations

from chip8 import FrameInputs, FrameOrchestrator, Machine, MachineConfig, encode_words


def test_frame_runs_budget_then_ticks_timers_once(machine: Machine) -> None:
    machine.load(encode_words(0x6005, 0xF015, 0x1204))
    orchestrator = FrameOrchestrator(machine=machine)

    result = orchestrator.run_frame(FrameInputs(instructions=2))

    assert result.executed == 2
    assert result.state.timers.delay == 4
    assert result.state.cpu.pc == 0x204

    results = orchestrator.run_frames([FrameInputs(instructions=1)] * 3)

    assert [r.state.timers.delay for r in results] == [3, 2, 1]
    assert orchestrator.frame_count == 4


def test_default_budget_comes_from_config() -> None:
    config = MachineConfig(instructions_per_second=180, timer_hz=60)
    orchestrator = FrameOrchestrator(config=config)
    orchestrator.machine.load(encode_words(0x7001, 0x1200))

    result = orchestrator.run_frame()

    assert orchestrator.instructions_per_frame == 3
    assert result.executed == 3
    assert orchestrator.machine.registers[0] == 2


def test_key_inputs_release_a_waiting_program() -> None:
    orchestrator = FrameOrchestrator(config=MachineConfig(instructions_per_second=240))
    orchestrator.machine.load(encode_words(0xF00A, 0x1202))

    waiting = orchestrator.run_frame()
    assert waiting.state.cpu.pc == 0x200

    pressed = orchestrator.run_frame(FrameInputs(press_keys=[0xA]))
    assert pressed.state.cpu.registers[0] == 0xA
    assert pressed.state.keys[0xA]

    released = orchestrator.run_frame(FrameInputs(release_all_keys=True))
    assert not any(released.state.keys)


def test_release_keys_applied_before_press(machine: Machine) -> None:
    machine.load(encode_words(0x1200))
    orchestrator = FrameOrchestrator(machine=machine)
    orchestrator.run_frame(FrameInputs(press_keys=[1, 2], instructions=1))

    result = orchestrator.run_frame(
        FrameInputs(press_keys=[2], release_keys=[1, 2], instructions=1)
    )

    assert result.state.keys[1] is False
    assert result.state.keys[2] is True


def test_sound_active_reported_per_frame(machine: Machine) -> None:
    machine.load(encode_words(0x6002, 0xF018, 0x1204))
    orchestrator = FrameOrchestrator(machine=machine)

    first = orchestrator.run_frame(FrameInputs(instructions=3))
    second = orchestrator.run_frame(FrameInputs(instructions=1))

    assert first.sound_active
    assert not second.sound_active
