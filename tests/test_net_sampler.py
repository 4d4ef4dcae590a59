import unittest

from resource_monitor.monitoring.errors import DegenerateInterval, MalformedData
from resource_monitor.monitoring.net_sampler import (
    NetSampler,
    aggregate_interfaces,
    parse_interface_line,
    rates_between,
)
from resource_monitor.monitoring.snapshots import NetRates, NetSnapshot
from tests._proc_support import FakeClock, FakeProc, net_dev_text, net_line


class ParseInterfaceLineTests(unittest.TestCase):
    def test_colon_followed_by_space(self):
        name, fields = parse_interface_line("eth0: 1000 0 0 0 0 0 0 0 2000 0 0 0 0 0 0 0")
        self.assertEqual(name, "eth0")
        self.assertEqual((fields[0], fields[8]), (1000, 2000))
        self.assertEqual(len(fields), 16)

    def test_colon_without_space(self):
        name, fields = parse_interface_line("eth0:1000 0 0 0 0 0 0 0 2000 0 0 0 0 0 0 0")
        self.assertEqual(name, "eth0")
        self.assertEqual((fields[0], fields[8]), (1000, 2000))

    def test_rejects_bad_lines(self):
        bad_lines = [
            "eth0 1000 0 0 0 0 0 0 0 2000 0 0 0 0 0 0 0",
            "eth0: 1000 0 0 0 0 0 0 0 2000",
            "eth0: 1000 0 0 0 x 0 0 0 2000 0 0 0 0 0 0 0",
            "eth0:abc 0 0 0 0 0 0 0 2000 0 0 0 0 0 0 0",
            ": 1000 0 0 0 0 0 0 0 2000 0 0 0 0 0 0 0",
        ]
        for line in bad_lines:
            with self.subTest(line=line), self.assertRaises(MalformedData):
                parse_interface_line(line)


class AggregateInterfacesTests(unittest.TestCase):
    def test_sums_interfaces_and_skips_headers(self):
        text = net_dev_text(net_line("eth0", 1000, 2000), net_line("wlan0", 300, 400, sticky=True))
        self.assertEqual(aggregate_interfaces(text), (1300, 2400))

    def test_loopback_excluded_by_exact_name(self):
        text = net_dev_text(
            net_line("lo", 999999, 999999),
            net_line("vlo", 10, 20),
            net_line("eth0", 1, 2),
        )
        self.assertEqual(aggregate_interfaces(text), (11, 22))

    def test_bad_line_skipped_others_counted(self):
        text = net_dev_text(
            "  eth1: broken line\n",
            net_line("eth0", 1000, 2000),
        )
        with self.assertLogs("resource_monitor.monitoring.net_sampler", level="WARNING"):
            self.assertEqual(aggregate_interfaces(text), (1000, 2000))

    def test_only_loopback_gives_zero_totals(self):
        self.assertEqual(aggregate_interfaces(net_dev_text(net_line("lo", 5, 5))), (0, 0))

    def test_all_lines_unparseable_is_malformed(self):
        with self.assertLogs("resource_monitor.monitoring.net_sampler", level="WARNING"):
            with self.assertRaises(MalformedData):
                aggregate_interfaces(net_dev_text("  eth0: x\n", "  eth1: y\n"))

    def test_missing_header_lines_is_malformed(self):
        for text in ("", "Inter-|   Receive\n"):
            with self.subTest(text=text):
                with self.assertRaises(MalformedData):
                    aggregate_interfaces(text)


class RatesBetweenTests(unittest.TestCase):
    def test_rates_per_second(self):
        rates = rates_between(NetSnapshot(1000, 2000, 10.0), NetSnapshot(5000, 3000, 12.0))
        self.assertEqual(rates, NetRates(down=2000.0, up=500.0))

    def test_counter_reset_gives_zero_not_negative(self):
        rates = rates_between(NetSnapshot(5000, 2000, 10.0), NetSnapshot(100, 4000, 12.0))
        self.assertEqual(rates.down, 0.0)
        self.assertEqual(rates.up, 1000.0)

    def test_non_positive_interval_is_degenerate(self):
        with self.assertRaises(DegenerateInterval):
            rates_between(NetSnapshot(0, 0, 10.0), NetSnapshot(10, 10, 10.0))
        with self.assertRaises(DegenerateInterval):
            rates_between(NetSnapshot(0, 0, 10.0), NetSnapshot(10, 10, 9.0))


class NetSamplerTests(unittest.TestCase):
    def setUp(self):
        self.proc = FakeProc()
        self.clock = FakeClock()
        self.sampler = NetSampler(self.proc.net_dev, clock=self.clock)

    def tearDown(self):
        self.proc.cleanup()

    def test_first_sample_seeds_without_rates(self):
        self.proc.write(self.proc.net_dev, net_dev_text(net_line("eth0", 1000, 2000)))
        rates, snapshot = self.sampler.sample(None)
        self.assertIsNone(rates)
        self.assertEqual(snapshot, NetSnapshot(1000, 2000, 100.0))

    def test_second_sample_derives_rates(self):
        self.proc.write(self.proc.net_dev, net_dev_text(net_line("eth0", 1000, 2000)))
        _, snapshot = self.sampler.sample(None)
        self.clock.advance(2.0)
        self.proc.write(self.proc.net_dev, net_dev_text(net_line("eth0", 2000, 6000)))
        rates, snapshot = self.sampler.sample(snapshot)
        self.assertEqual(rates, NetRates(down=500.0, up=2000.0))
        self.assertEqual(snapshot.timestamp, 102.0)

    def test_degenerate_interval_is_absent_but_snapshot_advances(self):
        self.proc.write(self.proc.net_dev, net_dev_text(net_line("eth0", 1000, 2000)))
        _, prev = self.sampler.sample(None)
        self.proc.write(self.proc.net_dev, net_dev_text(net_line("eth0", 3000, 4000)))
        with self.assertLogs("resource_monitor.monitoring.net_sampler", level="WARNING"):
            rates, snapshot = self.sampler.sample(prev)
        self.assertIsNone(rates)
        self.assertEqual(snapshot, NetSnapshot(3000, 4000, 100.0))

    def test_unreadable_source_keeps_previous_snapshot(self):
        prev = NetSnapshot(1000, 2000, 50.0)
        with self.assertLogs("resource_monitor.monitoring.net_sampler", level="WARNING") as logs:
            rates, snapshot = self.sampler.sample(prev)
        self.assertIsNone(rates)
        self.assertIs(snapshot, prev)
        self.assertIn("SourceUnreadable", logs.output[0])

    def test_empty_source_keeps_previous_snapshot(self):
        self.proc.write(self.proc.net_dev, net_dev_text(net_line("eth0", 10 ** 12, 10 ** 12)))
        _, first = self.sampler.sample(None)

        self.clock.advance(1.0)
        self.proc.write(self.proc.net_dev, "")
        with self.assertLogs("resource_monitor.monitoring.net_sampler", level="WARNING") as logs:
            rates, snapshot = self.sampler.sample(first)
        self.assertIsNone(rates)
        self.assertIs(snapshot, first)
        self.assertIn("MalformedData", logs.output[0])

        self.clock.advance(1.0)
        self.proc.write(self.proc.net_dev, net_dev_text(net_line("eth0", 10 ** 12 + 2000, 10 ** 12 + 2000)))
        rates, _ = self.sampler.sample(snapshot)
        self.assertEqual(rates, NetRates(down=1000.0, up=1000.0))


if __name__ == "__main__":
    unittest.main()
