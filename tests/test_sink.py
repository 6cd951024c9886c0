"""
Unit tests for outbound sinks.
"""
import logging
import unittest

from quizz.sink import LoggingSink, MemorySink, OutboundSink


class TestSinks(unittest.TestCase):

    def test_outbound_sink_is_abstract(self):
        with self.assertRaises(TypeError):
            OutboundSink()

    def test_memory_sink_keeps_order(self):
        sink = MemorySink()
        sink.send("one")
        sink.send("two")
        self.assertEqual(sink.lines, ["one", "two"])
        sink.clear()
        self.assertEqual(sink.lines, [])

    def test_logging_sink(self):
        sink = LoggingSink(logging.getLogger("quizz.test_sink"))
        with self.assertLogs("quizz.test_sink", level="INFO") as logs:
            sink.send("Capital of France?")
        self.assertIn("Capital of France?", logs.output[0])


if __name__ == '__main__':
    unittest.main()
