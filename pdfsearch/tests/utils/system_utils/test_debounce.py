import asyncio
import unittest

from pdfsearch.app.utils.system_utils.debounce import DebouncedCall


class TestDebouncedCall(unittest.IsolatedAsyncioTestCase):

    def setUp(self):
        self.calls = []

        self.debounce = DebouncedCall(self.calls.append, 0.02, name="test_debounce")

    # A burst of schedules results in one call with the last value
    async def test_burst_coalesces(self):
        for value in ["a", "ab", "abc"]:
            self.debounce.schedule(value)

        self.assertTrue(self.debounce.is_pending)

        self.assertEqual(self.debounce.pending_value, "abc")

        self.assertIsNotNone(self.debounce.deadline)

        await self.debounce.wait()

        self.assertEqual(self.calls, ["abc"])

        self.assertFalse(self.debounce.is_pending)

        self.assertIsNone(self.debounce.pending_value)

        self.assertIsNone(self.debounce.deadline)

    # Rescheduling pushes the deadline back
    async def test_reschedule_moves_deadline(self):
        self.debounce.schedule(1)

        first_deadline = self.debounce.deadline

        await asyncio.sleep(0.01)

        self.debounce.schedule(2)

        self.assertGreater(self.debounce.deadline, first_deadline)

        await self.debounce.wait()

        self.assertEqual(self.calls, [2])

    # Cancelled calls never run
    async def test_cancel(self):
        self.debounce.schedule("x")

        self.debounce.cancel()

        self.assertFalse(self.debounce.is_pending)

        await asyncio.sleep(0.04)

        await self.debounce.wait()

        self.assertEqual(self.calls, [])

    # Coroutine callbacks are awaited
    async def test_async_callback(self):
        results = []

        async def callback(value):
            await asyncio.sleep(0)

            results.append(value)

        debounce = DebouncedCall(callback, 0.01)

        debounce.schedule("done")

        await debounce.wait()

        self.assertEqual(results, ["done"])

    # Waiting with nothing pending returns immediately
    async def test_wait_idle(self):
        await self.debounce.wait()

        self.assertEqual(self.calls, [])
