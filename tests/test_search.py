"""
Tests for the four resumable searches and the engine factory.
"""

import random

import pytest

from conftest import KINDS, assert_valid_path, bfs_distance, run_all
from pathviz.core.algorithms import ALGORITHM_INFO, ALGORITHMS, create_engine
from pathviz.core.dijkstra import DijkstraAlgo
from pathviz.core.grid import create_empty, grid_from_text, place_start_end, random_maze
from pathviz.core.types import CellType, Position

P = Position


class TestEngineFactory:
    def test_registry_covers_every_kind(self) -> None:
        assert set(ALGORITHMS) == set(KINDS) == set(ALGORITHM_INFO)

    def test_unknown_kind_fails(self, open_5x5) -> None:
        with pytest.raises(ValueError):
            create_engine("greedy", open_5x5)

    def test_engine_does_not_alias_caller_grid(self, open_5x5, kind) -> None:
        engine = create_engine(kind, open_5x5)
        run_all(engine)
        assert all(c.type in (CellType.EMPTY, CellType.START, CellType.END) for c in open_5x5)
        assert all(c.parent is None for c in open_5x5)

    def test_missing_end_is_an_immediate_terminal_step(self, kind) -> None:
        engine = create_engine(kind, grid_from_text("S.."))
        step = engine.advance()
        assert step.is_done
        assert not step.is_path_found
        assert step.nodes_explored == 0
        assert step.execution_time == 0.0
        assert step.path == ()


class TestStepContract:
    def test_advance_after_done_returns_same_step(self, open_5x5, kind) -> None:
        engine = create_engine(kind, open_5x5)
        final = run_all(engine)[-1]
        assert engine.advance() is final
        assert engine.is_done

    def test_only_the_last_step_is_terminal(self, open_5x5, kind) -> None:
        steps = run_all(create_engine(kind, open_5x5))
        assert [s.is_done for s in steps[:-1]] == [False] * (len(steps) - 1)
        assert all(s.path == () for s in steps[:-1])

    def test_steps_are_independent_snapshots(self, open_5x5, kind) -> None:
        engine = create_engine(kind, open_5x5)
        first = engine.advance()
        before = [c.type for c in first.grid]
        run_all(engine)
        assert [c.type for c in first.grid] == before

    def test_visited_is_cumulative(self, open_5x5, kind) -> None:
        steps = run_all(create_engine(kind, open_5x5))
        for prev, nxt in zip(steps, steps[1:]):
            assert nxt.visited[:len(prev.visited)] == prev.visited

    def test_determinism(self, open_5x5, kind) -> None:
        def trace():
            return [(s.current, s.frontier, s.visited, s.nodes_explored)
                    for s in run_all(create_engine(kind, open_5x5))]
        assert trace() == trace()

    def test_reset_restarts_the_run(self, open_5x5, kind) -> None:
        engine = create_engine(kind, open_5x5)
        first = engine.advance()
        run_all(engine)
        engine.reset()
        again = engine.advance()
        assert (again.current, again.frontier, again.nodes_explored) == \
               (first.current, first.frontier, first.nodes_explored)


class TestDisplay:
    def test_first_bfs_steps(self, open_5x5) -> None:
        engine = create_engine("bfs", open_5x5)
        s1 = engine.advance()
        assert s1.current == P(0, 0)
        assert s1.frontier == (P(0, 1), P(1, 0))
        assert s1.grid[P(0, 0)].type is CellType.START
        assert s1.grid[P(0, 1)].type is CellType.FRONTIER

        s2 = engine.advance()
        assert s2.current == P(0, 1)
        assert s2.frontier == (P(0, 2), P(1, 1))
        assert s2.grid[P(0, 1)].type is CellType.CURRENT
        assert s2.grid[P(0, 1)].is_visited

        s3 = engine.advance()
        assert s3.current == P(1, 0)
        assert s3.grid[P(0, 1)].type is CellType.VISITED
        assert s3.grid[P(1, 0)].type is CellType.CURRENT

    def test_goal_keeps_end_type_when_discovered(self) -> None:
        step = create_engine("bfs", grid_from_text("SE")).advance()
        assert step.frontier == (P(0, 1),)
        assert step.grid[P(0, 1)].type is CellType.END

    def test_found_path_is_relabelled(self, open_5x5, kind) -> None:
        final = run_all(create_engine(kind, open_5x5))[-1]
        path = final.path
        assert final.grid[path[0]].type is CellType.START
        assert final.grid[path[-1]].type is CellType.END
        assert all(final.grid[p].type is CellType.PATH for p in path[1:-1])


class TestSearchOrder:
    def test_dfs_explores_last_pushed_first(self, open_5x5) -> None:
        engine = create_engine("dfs", open_5x5)
        engine.advance()
        assert engine.advance().current == P(1, 0)

    def test_dijkstra_breaks_ties_by_insertion(self, open_5x5) -> None:
        engine = create_engine("dijkstra", open_5x5)
        engine.advance()
        assert engine.advance().current == P(0, 1)
        assert engine.advance().current == P(1, 0)

    def test_astar_scores(self, open_5x5) -> None:
        engine = create_engine("astar", open_5x5)
        step = engine.advance()
        cell = step.grid[P(0, 1)]
        assert (cell.g_score, cell.h_score, cell.f_score) == (1, 7, 8)
        assert cell.parent == P(0, 0)
        assert step.grid[P(0, 0)].f_score == 8

    def test_astar_heads_for_the_goal(self) -> None:
        grid = place_start_end(create_empty(1, 9), P(0, 4), P(0, 8))
        final = run_all(create_engine("astar", grid))[-1]
        assert final.nodes_explored == 5
        assert P(0, 3) not in final.visited

    def test_stale_queue_entries_are_skipped(self) -> None:
        engine = DijkstraAlgo()
        engine.init(grid_from_text("S.E"))
        engine.advance()
        engine.open_pq.enqueue(P(0, 0), 0)
        step = engine.advance()
        assert step.current == P(0, 1)
        assert step.nodes_explored == 2
        assert step.visited == (P(0, 0), P(0, 1))


class TestOutcomes:
    def test_open_grid_shortest_paths(self, open_5x5) -> None:
        results = {k: run_all(create_engine(k, open_5x5))[-1] for k in KINDS}
        for k, final in results.items():
            assert final.is_path_found, k
            assert_valid_path(open_5x5, final.path)
        assert len(results["bfs"].path) == 9
        assert len(results["dijkstra"].path) == 9
        assert len(results["astar"].path) == 9
        assert results["astar"].nodes_explored <= results["dijkstra"].nodes_explored

    def test_single_gap_is_used(self, kind) -> None:
        grid = grid_from_text("""
            S..
            #.#
            ..E
        """)
        final = run_all(create_engine(kind, grid))[-1]
        assert final.is_path_found
        assert P(1, 1) in final.path
        assert_valid_path(grid, final.path)

    def test_enclosed_start(self, kind) -> None:
        grid = grid_from_text("""
            .....
            ..#..
            .#S#.
            ..#..
            ....E
        """)
        steps = run_all(create_engine(kind, grid))
        final = steps[-1]
        assert not final.is_path_found
        assert final.nodes_explored == 1
        assert final.path == ()
        assert len(steps) == 2

    def test_unreachable_goal_explores_the_component(self, kind) -> None:
        grid = grid_from_text("""
            S.#..
            ..#..
            ###..
            ....E
        """)
        final = run_all(create_engine(kind, grid))[-1]
        assert not final.is_path_found
        assert final.nodes_explored == 4
        assert set(final.visited) == {P(0, 0), P(0, 1), P(1, 0), P(1, 1)}
        assert final.grid[P(1, 1)].type is CellType.VISITED

    @pytest.mark.parametrize("seed", range(12))
    def test_random_mazes(self, seed: int) -> None:
        rng = random.Random(seed)
        grid = random_maze(place_start_end(create_empty(12, 15)), 0.3, rng)
        expected = bfs_distance(grid)
        for k in KINDS:
            final = run_all(create_engine(k, grid))[-1]
            assert final.is_path_found == (expected is not None), k
            assert len(final.visited) == len(set(final.visited)) == final.nodes_explored
            if expected is None:
                continue
            assert_valid_path(grid, final.path)
            if k != "dfs":
                assert len(final.path) - 1 == expected, k

    def test_parent_chain_reaches_start(self, open_5x5, kind) -> None:
        final = run_all(create_engine(kind, open_5x5))[-1]
        cur = P(4, 4)
        seen = set()
        while final.grid[cur].parent is not None:
            assert cur not in seen
            seen.add(cur)
            cur = final.grid[cur].parent
        assert cur == P(0, 0)

    def test_metrics(self, open_5x5) -> None:
        final = run_all(create_engine("bfs", open_5x5))[-1]
        assert final.metrics["algo"] == "BFS"
        assert final.metrics["popped"] == final.nodes_explored
        assert final.metrics["path_len"] == 9
        assert final.execution_time >= 0
