from pathviz.core.pqueue import PriorityQueue


class TestPriorityQueue:
    def test_dequeues_lowest_priority_first(self) -> None:
        pq = PriorityQueue()
        pq.enqueue("c", 3)
        pq.enqueue("a", 1)
        pq.enqueue("b", 2)
        assert [pq.dequeue(), pq.dequeue(), pq.dequeue()] == ["a", "b", "c"]

    def test_equal_priorities_are_fifo(self) -> None:
        pq = PriorityQueue()
        for name in ("first", "second", "third"):
            pq.enqueue(name, 5)
        pq.enqueue("early", 1)
        assert pq.dequeue() == "early"
        assert [pq.dequeue(), pq.dequeue(), pq.dequeue()] == ["first", "second", "third"]

    def test_empty_queue(self) -> None:
        pq = PriorityQueue()
        assert pq.is_empty()
        assert pq.size() == 0
        assert pq.dequeue() is None
        assert pq.peek() is None

    def test_peek_does_not_remove(self) -> None:
        pq = PriorityQueue()
        pq.enqueue("x", 2)
        pq.enqueue("y", 1)
        assert pq.peek() == "y"
        assert len(pq) == 2

    def test_unorderable_elements(self) -> None:
        pq = PriorityQueue()
        pq.enqueue({"k": 1}, 0)
        pq.enqueue({"k": 2}, 0)
        assert pq.dequeue() == {"k": 1}

    def test_duplicates_are_kept(self) -> None:
        pq = PriorityQueue()
        pq.enqueue("n", 4)
        pq.enqueue("n", 2)
        assert pq.size() == 2
        assert pq.dequeue() == "n"
        assert pq.dequeue() == "n"
        assert pq.is_empty()
