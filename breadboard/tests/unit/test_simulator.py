"""End-to-end tests for simulate_circuit: nets, netlist, solve and interpretation."""

import pytest
from breadboard.simulation.results import BulbState, SimulationResult
from breadboard.simulation.simulator import simulate_circuit
from breadboard.simulation.solver import DCSolution, DCSolver, SolverError
from conftest import MINUS, PLUS, build_snapshot, series_batteries

SINGLE_LOOP_CURRENT = 9.0 / 500.1
POT_LADDER = (100, 250, 500, 1000, 2000, 5000, 10000)


class RaisingSolver(DCSolver):
    def __init__(self, error):
        self.error = error
        self.calls = 0

    def solve(self, netlist):
        self.calls += 1
        raise self.error


class FixedSolver(DCSolver):
    """Returns a preset operating point regardless of the netlist."""

    def __init__(self, voltages, branch_currents):
        self.solution = DCSolution(voltages, branch_currents)

    def solve(self, netlist):
        return self.solution


class TestIncomplete:
    def test_empty_circuit(self, loose_snapshot):
        assert simulate_circuit(loose_snapshot([], [])) == SimulationResult()

    def test_no_battery_is_incomplete(self):
        snapshot = build_snapshot([("bulb", "L1")], [("L1", 0, "L1", 1)])
        result = simulate_circuit(snapshot)
        assert result == SimulationResult()
        assert result.bulb_states == {}
        assert result.node_voltages == {}

    def test_incomplete_does_not_call_solver(self):
        solver = RaisingSolver(SolverError("never"))
        simulate_circuit(build_snapshot([("bulb", "L1")]), solver)
        assert solver.calls == 0


class TestSingleLoop:
    def test_bulb_lights_at_normal_current(self, single_loop):
        result = simulate_circuit(single_loop)
        bulb = result.bulb_states["L1"]
        assert bulb.is_on
        assert not bulb.is_burned_out
        assert bulb.current == pytest.approx(SINGLE_LOOP_CURRENT, rel=1e-6)
        assert bulb.current == pytest.approx(0.017996, abs=1e-6)
        assert bulb.brightness == pytest.approx(0.9998, abs=1e-4)
        assert bulb.voltage == pytest.approx(500 * SINGLE_LOOP_CURRENT, rel=1e-6)
        assert bulb.power == pytest.approx(bulb.voltage * bulb.current)

    def test_aggregate_fields(self, single_loop):
        result = simulate_circuit(single_loop)
        assert result.has_closed_loop
        assert result.bulbs_on_count == 1
        assert result.battery_indices == []
        assert result.total_current == pytest.approx(SINGLE_LOOP_CURRENT, rel=1e-6)

    def test_node_voltages_exclude_ground(self, single_loop):
        result = simulate_circuit(single_loop)
        assert "gnd" not in result.node_voltages
        assert result.node_voltages["net1"] == pytest.approx(500 * SINGLE_LOOP_CURRENT, rel=1e-6)
        assert result.node_voltages["B1:internal"] == pytest.approx(9.0)

    def test_terminal_voltages_are_signed(self, single_loop):
        bulb = simulate_circuit(single_loop).bulb_states["L1"]
        assert bulb.voltage_node1 > 0
        assert bulb.voltage_node2 == 0.0

    def test_reversed_bulb_gives_same_magnitude(self):
        snapshot = build_snapshot(
            [("battery", "B1"), ("bulb", "L1")],
            [("B1", PLUS, "L1", 1), ("L1", 0, "B1", MINUS)],
        )
        bulb = simulate_circuit(snapshot).bulb_states["L1"]
        assert bulb.is_on
        assert bulb.current == pytest.approx(SINGLE_LOOP_CURRENT, rel=1e-6)
        assert bulb.voltage_node1 == 0.0

    def test_idempotent(self, single_loop):
        first = simulate_circuit(single_loop)
        second = simulate_circuit(single_loop)
        assert first == second
        assert first.to_dict() == second.to_dict()


class TestSeriesAndParallel:
    def test_two_series_batteries_clamp_brightness(self):
        result = simulate_circuit(series_batteries(2))
        bulb = result.bulb_states["L1"]
        assert bulb.current == pytest.approx(18.0 / 500.2, rel=1e-6)
        assert bulb.is_on
        assert bulb.brightness == 2.0
        assert result.battery_indices == []

    def test_four_series_batteries_burn_out_bulb(self):
        result = simulate_circuit(series_batteries(4))
        bulb = result.bulb_states["L1"]
        assert bulb.current == pytest.approx(36.0 / 500.4, rel=1e-6)
        assert bulb.is_burned_out
        assert not bulb.is_on
        assert bulb.brightness == 0.0
        assert result.bulbs_on_count == 0
        # Current still flows, so the loop counts as closed
        assert result.has_closed_loop
        assert result.battery_indices == []

    def test_two_bulbs_in_series_are_dim(self):
        result = simulate_circuit(series_batteries(1, bulbs=2))
        assert result.bulbs_on_count == 2
        for state in result.bulb_states.values():
            assert state.current == pytest.approx(9.0 / 1000.1, rel=1e-6)
            assert 0 < state.brightness < 1

    def test_parallel_bulbs_share_voltage(self):
        snapshot = build_snapshot(
            [("battery", "B1"), ("bulb", "L1"), ("bulb", "L2")],
            [
                ("B1", PLUS, "L1", 0), ("B1", PLUS, "L2", 0),
                ("L1", 1, "B1", MINUS), ("L2", 1, "B1", MINUS),
            ],
        )
        result = simulate_circuit(snapshot)
        assert result.bulbs_on_count == 2
        assert result.total_current == pytest.approx(9.0 / 250.1, rel=1e-6)
        assert result.bulb_states["L1"].current == pytest.approx(result.bulb_states["L2"].current)

    def test_parallel_batteries_light_bulb(self):
        snapshot = build_snapshot(
            [("battery", "B1"), ("battery", "B2"), ("bulb", "L1")],
            [
                ("B1", PLUS, "B2", PLUS), ("B1", MINUS, "B2", MINUS),
                ("B1", PLUS, "L1", 0), ("L1", 1, "B1", MINUS),
            ],
        )
        result = simulate_circuit(snapshot)
        bulb = result.bulb_states["L1"]
        assert bulb.is_on
        assert bulb.current == pytest.approx(9.0 / 500.05, rel=1e-6)
        # Each pack carries half the load
        assert result.total_current == pytest.approx(bulb.current / 2, rel=1e-6)
        assert result.battery_indices == []

    def test_parallel_batteries_without_load_carry_no_current(self):
        snapshot = build_snapshot(
            [("battery", "B1"), ("battery", "B2")],
            [("B1", PLUS, "B2", PLUS), ("B1", MINUS, "B2", MINUS)],
        )
        result = simulate_circuit(snapshot)
        assert result.total_current == pytest.approx(0.0, abs=1e-6)
        assert result.battery_indices == []
        assert not result.has_closed_loop

    def test_unwired_bulb_stays_dark(self):
        snapshot = build_snapshot(
            [("battery", "B1"), ("bulb", "L1"), ("bulb", "L2")],
            [("B1", PLUS, "L1", 0), ("L1", 1, "B1", MINUS)],
        )
        result = simulate_circuit(snapshot)
        assert result.bulbs_on_count == 1
        dark = result.bulb_states["L2"]
        assert not dark.is_on
        assert dark.is_burned_out is False
        assert dark.brightness == 0.0
        assert dark.current == pytest.approx(0.0, abs=1e-9)


class TestBatteryFaults:
    def test_self_short_detected(self, self_shorted_battery):
        result = simulate_circuit(self_shorted_battery)
        assert result.battery_indices == [1]
        assert result.total_current == 0.0
        assert not result.has_closed_loop
        assert not result.bulb_states["L1"].is_on

    def test_no_load_short_flags_all_batteries(self, opposed_batteries):
        result = simulate_circuit(opposed_batteries)
        assert result.total_current > 0.1
        assert result.total_current == pytest.approx(90.0, rel=1e-6)
        assert result.bulbs_on_count == 0
        assert result.battery_indices == [1, 2]
        assert result.has_closed_loop

    def test_loop_without_bulb_through_potentiometer(self):
        snapshot = build_snapshot(
            [("battery", "B1"), ("potentiometer", "P1", 1000)],
            [("B1", PLUS, "P1", 0), ("P1", 1, "B1", MINUS)],
        )
        result = simulate_circuit(snapshot)
        assert result.has_closed_loop
        assert result.bulbs_on_count == 0
        assert result.battery_indices == []
        assert result.total_current == pytest.approx(9.0 / 1000.1, rel=1e-6)

    def test_direct_short_through_small_pot_flags_battery(self):
        snapshot = build_snapshot(
            [("battery", "B1"), ("potentiometer", "P1", 10)],
            [("B1", PLUS, "P1", 0), ("P1", 1, "B1", MINUS)],
        )
        result = simulate_circuit(snapshot)
        assert result.battery_indices == [1]


class TestPotentiometer:
    def test_current_decreases_with_resistance(self, pot_loop):
        currents = []
        for resistance in POT_LADDER:
            result = simulate_circuit(pot_loop.with_resistance("P1", resistance))
            currents.append(result.bulb_states["L1"].current)
        assert currents == sorted(currents, reverse=True)
        assert len(set(currents)) == len(currents)

    def test_brightness_decreases_with_resistance(self, pot_loop):
        brightness = [
            simulate_circuit(pot_loop.with_resistance("P1", r)).bulb_states["L1"].brightness
            for r in POT_LADDER
        ]
        assert all(a > b for a, b in zip(brightness, brightness[1:]))

    def test_current_decreases_without_bulb(self):
        snapshot = build_snapshot(
            [("battery", "B1"), ("potentiometer", "P1")],
            [("B1", PLUS, "P1", 0), ("P1", 1, "B1", MINUS)],
        )
        currents = [
            simulate_circuit(snapshot.with_resistance("P1", r)).total_current
            for r in POT_LADDER
        ]
        assert all(a > b for a, b in zip(currents, currents[1:]))
        assert currents[-1] == pytest.approx(9.0 / 10000.1, rel=1e-6)

    def test_default_resistance(self, pot_loop):
        result = simulate_circuit(pot_loop)
        assert result.total_current == pytest.approx(9.0 / 1000.1, rel=1e-6)


class TestFailures:
    def test_solver_error_flags_all_batteries(self):
        snapshot = series_batteries(2)
        result = simulate_circuit(snapshot, RaisingSolver(SolverError("singular")))
        assert result.battery_indices == [1, 2]
        assert result.bulb_states == {"L1": BulbState()}
        assert result.node_voltages == {}
        assert result.total_current == 0.0
        assert not result.has_closed_loop

    def test_unexpected_exception_is_contained(self, single_loop, caplog):
        result = simulate_circuit(single_loop, RaisingSolver(RuntimeError("boom")))
        assert result.battery_indices == [1]
        assert "Simulation error" in caplog.text

    def test_invalid_potentiometer_value(self, pot_loop):
        result = simulate_circuit(pot_loop.with_resistance("P1", -5))
        assert result.battery_indices == [1]
        assert not result.bulb_states["L1"].is_analysed

    def test_custom_solver_is_used(self, single_loop):
        solver = FixedSolver({"net1": 4.5, "B1:internal": 9.0}, {"B1": -0.009})
        result = simulate_circuit(single_loop, solver)
        assert result.total_current == pytest.approx(0.009)
        assert result.bulb_states["L1"].voltage == pytest.approx(4.5)
