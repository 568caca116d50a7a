import pytest

from poolstat.zpool.core.entities.pool_status import DeviceKind, DeviceState
from poolstat.zpool.core.exceptions.parse_exceptions import MalformedLineError, NumericParseError
from poolstat.zpool.parsers.field_extractor import FieldExtractor
from poolstat.zpool.parsers.topology_builder import TopologyBuilder, build_topology, count_indent
from tests.fixtures.zpool_outputs import (
    SCENARIO_REPORT,
    SPECIAL_VDEVS_REPORT,
    DEEP_DEDENT_REPORT,
    MALFORMED_REPORT,
)


def sections(report):
    fields = FieldExtractor(report)
    return fields.get("config", keep_newlines=True), fields.get("spares", keep_newlines=True)


def assert_links(nodes, parent=None):
    for node in nodes:
        assert node.parent is parent
        assert_links(node.children, node)


class TestTopologyBuilder:

    def test_scenario_tree(self):
        topology = build_topology(*sections(SCENARIO_REPORT))

        assert topology.pool_line.name == "zeepool"
        assert [d.name for d in topology.devices] == ["mirror-0"]

        mirror = topology.devices[0]
        assert mirror.kind == DeviceKind.MIRROR
        assert [c.name for c in mirror.children] == ["c1t2d0", "spare-1"]

        spare = mirror.children[1]
        assert spare.kind == DeviceKind.SPARE
        assert [c.name for c in spare.children] == ["c2t3d0", "c2t1d0"]
        assert spare.children[0].message == "90K resilvered"
        assert spare.children[0].depth == 3

        assert [s.name for s in topology.spares] == ["c2t3d0"]
        assert topology.spares[0].state == DeviceState.IN_USE
        assert topology.errors == []

    def test_parent_links(self):
        topology = build_topology(*sections(SCENARIO_REPORT))

        assert_links(topology.devices)
        leaf = topology.devices[0].children[1].children[1]
        assert leaf.path() == ["mirror-0", "spare-1", "c2t1d0"]
        assert leaf.root is topology.devices[0]

    def test_multi_level_dedent(self):
        topology = build_topology(*sections(DEEP_DEDENT_REPORT))

        assert [d.name for d in topology.devices] == ["mirror-0", "mirror-1", "raidz1-2"]
        mirror0, mirror1, raidz = topology.devices
        assert [c.name for c in mirror0.children] == ["spare-0", "sde"]
        assert [c.name for c in mirror0.children[0].children] == ["sda", "sdb"]
        assert mirror1.parent is None
        assert [c.name for c in mirror1.children[0].children] == ["sdc"]
        assert raidz.kind == DeviceKind.RAIDZ1
        assert raidz.parent is None
        assert [c.name for c in raidz.children] == ["sdd"]
        assert_links(topology.devices)

    def test_pool_level_sections_end_tree(self):
        config, spares = sections(SPECIAL_VDEVS_REPORT)
        topology = build_topology(config, spares)

        assert [d.name for d in topology.devices] == ["raidz2-0"]
        assert topology.devices[0].kind == DeviceKind.RAIDZ2
        assert len(topology.devices[0].children) == 5
        names = [node.name for device in topology.devices for node in device.walk()]
        assert "nvme0n1" not in names
        assert "nvme1n1" not in names
        assert [s.name for s in topology.spares] == ["sdf", "sdg"]
        assert all(s.state == DeviceState.AVAILABLE for s in topology.spares)

    def test_pool_line_is_not_a_device(self):
        topology = build_topology("  NAME STATE READ WRITE CKSUM\n  tank ONLINE 0 0 0\n")

        assert topology.pool_line.name == "tank"
        assert topology.devices == []

    def test_empty_config(self):
        topology = build_topology("")

        assert topology.pool_line is None
        assert topology.devices == []
        assert topology.spares == []

    def test_strict_mode_raises(self):
        config, spares = sections(MALFORMED_REPORT)

        with pytest.raises(NumericParseError):
            TopologyBuilder(strict=True).build(config, spares)

    def test_lenient_mode_collects_errors(self):
        config, spares = sections(MALFORMED_REPORT)
        topology = TopologyBuilder(strict=False).build(config, spares)

        assert [c.name for c in topology.devices[0].children] == ["sdb"]
        assert len(topology.errors) == 2
        assert isinstance(topology.errors[0], NumericParseError)
        assert isinstance(topology.errors[1], MalformedLineError)

    def test_malformed_spare_line(self):
        with pytest.raises(MalformedLineError):
            build_topology("", "  sdf\n")

        topology = build_topology("", "  sdf\n  sdg AVAIL\n", strict=False)
        assert [s.name for s in topology.spares] == ["sdg"]
        assert len(topology.errors) == 1


def test_count_indent():
    assert count_indent("    sda") == 4
    assert count_indent("sda") == 0
    assert count_indent("") == 0
