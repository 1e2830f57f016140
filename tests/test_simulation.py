"""
Unit tests for simulation execution.

Tests DrivingSimulator.tick and DrivingSimulator.run, which run the
dynamics model and the audio reactor in tick order.
"""

import numpy as np
import pytest

from vehicle import (
    AudioReactor,
    Channel,
    DrivingSimulator,
    FixedStepClock,
    InputFrame,
    RecordingAudioOutput,
    VehicleParams,
)


class TestSimulation:
    """Test suite for simulation execution"""

    @pytest.fixture
    def params(self) -> VehicleParams:
        """Create the demo's handling constants"""
        return VehicleParams(acceleration=0.015, deceleration=0.98, max_speed=0.5)

    @pytest.fixture
    def simulator(self, params: VehicleParams) -> DrivingSimulator:
        return DrivingSimulator(params)

    def test_tick_before_initialize_is_skipped(self, params: VehicleParams) -> None:
        """Test that ticks before the vehicle is placed do nothing"""
        output = RecordingAudioOutput()
        simulator = DrivingSimulator(params, output=output)
        simulator.reactor.mark_all_ready()

        assert simulator.tick(InputFrame(throttle=1.0)) is None
        assert output.calls == []
        assert simulator.model.state.speed == 0.0

    def test_initialize_places_vehicle(self, simulator: DrivingSimulator) -> None:
        """Test that initialize uses the demo's starting position by default"""
        simulator.initialize()

        assert simulator.is_initialized
        assert np.allclose(simulator.model.state.position, [0.0, 0.02, 0.0])

    def test_tick_advances_fixed_clock(self, simulator: DrivingSimulator) -> None:
        """Test that the default clock advances one tick period per tick"""
        simulator.initialize()
        simulator.tick(InputFrame())
        simulator.tick(InputFrame())

        assert isinstance(simulator.clock, FixedStepClock)
        assert abs(simulator.clock() - 2 / 60.0) < 1e-12

    def test_external_output_not_marked_ready(self, params: VehicleParams) -> None:
        """Test that a caller-supplied output waits for its assets"""
        output = RecordingAudioOutput()
        simulator = DrivingSimulator(params, output=output)
        simulator.initialize()

        for _ in range(20):
            simulator.tick(InputFrame(throttle=1.0))

        assert output.calls == []

    def test_run_returns_trace_per_tick(self, simulator: DrivingSimulator) -> None:
        """Test that run records one row per input frame"""
        trace = simulator.run([InputFrame(throttle=1.0)] * 30)

        assert len(trace) == 30
        assert trace.position.shape == (30, 3)
        assert trace.speed.shape == (30,)
        assert set(trace.channel_activity) == {channel.value for channel in Channel}
        assert all(len(v) == 30 for v in trace.channel_activity.values())

    def test_run_time_axis(self, simulator: DrivingSimulator) -> None:
        """Test that the time axis starts at 0 and steps by the tick period"""
        trace = simulator.run([InputFrame()] * 10)

        assert trace.time[0] == 0.0
        assert np.allclose(np.diff(trace.time), 1 / 60.0)

    def test_run_empty(self, simulator: DrivingSimulator) -> None:
        """Test that an empty input sequence yields an empty trace"""
        trace = simulator.run([])

        assert len(trace) == 0
        assert trace.position.shape == (0, 3)

    def test_fifty_ticks_full_throttle(self, simulator: DrivingSimulator, params: VehicleParams) -> None:
        """Test 50 ticks of full throttle from rest: fast enough for engine and tires"""
        trace = simulator.run([InputFrame(throttle=1.0)] * 50)

        # v' = 0.98 * (v + 0.015) is still short of max speed after 50 ticks
        assert 0.9 * params.max_speed < trace.speed[-1] < params.max_speed
        assert simulator.reactor.is_playing(Channel.ENGINE)
        assert simulator.reactor.is_playing(Channel.TIRES)
        assert not simulator.reactor.is_playing(Channel.SKIDDING)

    def test_full_throttle_settles_at_max_speed(
        self, simulator: DrivingSimulator, params: VehicleParams
    ) -> None:
        """Test that sustained throttle ends clamped at max speed with engine and tires on"""
        trace = simulator.run([InputFrame(throttle=1.0)] * 150)

        assert abs(trace.speed[-1] - params.max_speed) <= 0.01 * params.max_speed
        assert np.all(trace.speed <= params.max_speed + 1e-9)
        assert simulator.reactor.channels[Channel.ENGINE].is_playing
        assert simulator.reactor.channels[Channel.TIRES].is_playing
        assert trace.audio_starts["engine"] == 1
        assert trace.audio_starts["tires"] == 1

    def test_coasting_to_rest_stops_engine(self, simulator: DrivingSimulator) -> None:
        """Test that the engine loop stops once the car rolls to a halt"""
        trace = simulator.run([InputFrame(throttle=1.0)] * 60 + [InputFrame(brake=True)] * 300)

        assert trace.speed[-1] < 0.01
        assert not simulator.reactor.is_playing(Channel.ENGINE)
        assert simulator.output.count("stop", Channel.ENGINE) == 1

    def test_trace_stays_finite(self, simulator: DrivingSimulator) -> None:
        """Test that a long steering drive produces no NaN or infinite values"""
        frames = [InputFrame(throttle=1.0, steering=1.0 if (i // 90) % 2 else -1.0) for i in range(1000)]

        trace = simulator.run(frames)

        assert np.all(np.isfinite(trace.position))
        assert np.all(np.isfinite(trace.speed))
        assert np.all(np.isfinite(trace.heading))

    def test_collisions_debounced_end_to_end(self, params: VehicleParams) -> None:
        """Test that a constant collision contact yields one event per refractory window"""
        simulator = DrivingSimulator(params, collision_probe=lambda state: True)

        trace = simulator.run([InputFrame()] * 60)  # one second at 60 Hz

        assert int(np.sum(trace.has_collision)) == 2
        assert simulator.output.count("play_one_shot", Channel.COLLISION) == 2

    def test_shared_reactor_output(self, params: VehicleParams) -> None:
        """Test that the reactor drives the output handed to the simulator"""
        output = RecordingAudioOutput()
        simulator = DrivingSimulator(params, output=output)
        simulator.reactor.mark_all_ready()

        simulator.run([InputFrame(throttle=1.0)] * 20)

        assert isinstance(simulator.reactor, AudioReactor)
        assert simulator.reactor.output is output
        assert output.count("play_loop", Channel.ENGINE) == 1
