"""Tests for switchtopo data models."""

from datetime import datetime

import pytest

from switchtopo.exceptions import InvariantViolation, MalformedAddress, MalformedHostname, MalformedMac
from switchtopo.models.connected import ConnectedDevice
from switchtopo.models.datasource import DataSource, EnrichmentRecord, SourceKind
from switchtopo.models.device import IPDevice, canonical_ip, is_valid_ip
from switchtopo.models.mac import UNKNOWN_MAC
from switchtopo.models.port import PoEConfig, Port
from switchtopo.models.records import VlanEntry, VlanMember
from switchtopo.models.vlan import Vlan


@pytest.fixture()
def source():
    return DataSource("inventory")


class TestIPDevice:
    """Test IPDevice identity."""

    def test_valid(self):
        """Address and hostname should be stored, hostname stripped."""
        device = IPDevice("10.0.0.1", "  core ")
        assert device.ip == "10.0.0.1"
        assert device.hostname == "core"

    def test_ipv6_canonical(self):
        """IPv6 addresses should be stored in canonical form."""
        assert IPDevice("FE80:0:0::1", "x").ip == "fe80::1"

    def test_bad_address(self):
        with pytest.raises(MalformedAddress):
            IPDevice("not-an-ip", "x")

    def test_empty_hostname(self):
        with pytest.raises(MalformedHostname):
            IPDevice("10.0.0.1", "   ")

    def test_read_only(self):
        """ip and hostname cannot be reassigned."""
        device = IPDevice("10.0.0.1", "core")
        with pytest.raises(AttributeError):
            device.ip = "10.0.0.2"

    def test_helpers(self):
        assert canonical_ip(" 192.168.1.1 ") == "192.168.1.1"
        assert is_valid_ip("::1")
        assert not is_valid_ip("300.1.1.1")


class TestPoEConfig:
    """Test PoEConfig range invariants."""

    def test_zero_max_rejected(self):
        """usage = max = 0 should fail because max must be positive."""
        with pytest.raises(InvariantViolation):
            PoEConfig(True, 0, 0)

    def test_usage_above_max_rejected(self):
        config = PoEConfig(True, 15.4, 3.0)
        with pytest.raises(InvariantViolation):
            config.usage = 16.0
        assert config.usage == 3.0

    def test_max_below_usage_rejected(self):
        config = PoEConfig(True, 15.4, 10.0)
        with pytest.raises(InvariantViolation):
            config.max_power = 9.0
        assert config.max_power == 15.4

    def test_negative_usage_rejected(self):
        with pytest.raises(InvariantViolation):
            PoEConfig(True, 15.4, -1)

    def test_construction_usage_above_max_rejected(self):
        with pytest.raises(InvariantViolation):
            PoEConfig(True, 15.4, 30.0)

    def test_sequential_updates(self):
        """Raising max then usage up to the new max should succeed."""
        config = PoEConfig(True, 15.4, 15.4)
        config.max_power = 30.0
        config.usage = 30.0
        assert config.max_power == 30.0
        assert config.usage == 30.0

    def test_enable_disable_copy(self):
        config = PoEConfig(False, 15.4, 0)
        config.enable()
        clone = config.copy()
        config.disable()
        assert clone.enabled
        assert not config.enabled
        assert clone.max_power == 15.4


class TestPort:
    """Test Port presence semantics and VLAN attachment."""

    def test_defaults(self):
        """A bare port has no mode, trunk or PoE config."""
        port = Port("A1", True)
        assert not port.has_known_mode
        assert not port.is_in_trunk
        assert not port.has_poe_config
        assert port.vlans == {}

    @pytest.mark.parametrize("attr", ["mode", "trunk_name", "poe_config"])
    def test_unset_read_raises(self, attr):
        with pytest.raises(InvariantViolation):
            getattr(Port("A1", True), attr)

    def test_empty_mode_rejected(self):
        port = Port("A1", True)
        with pytest.raises(InvariantViolation):
            port.mode = "  "

    @pytest.mark.parametrize("name", ["", "   "])
    def test_empty_name_rejected(self, name):
        with pytest.raises(InvariantViolation):
            Port(name, True)

    def test_name_stripped(self):
        assert Port(" A1 ", True).name == "A1"

    def test_copy_isolated(self):
        """A copy keeps the port settings but owns its VLANs and PoE config."""
        port = Port("A1", True, mode="Auto", trunk_name="Trk1", poe=PoEConfig(True, 15.4, 1.0))
        port.attach_vlan(Vlan(10, "data"))
        clone = port.copy()
        clone.vlans[10].devices("aa:bb:cc:dd:ee:ff")
        clone.poe_config.usage = 5.0

        assert (clone.name, clone.mode, clone.trunk_name) == ("A1", "Auto", "Trk1")
        assert port.vlans[10].mac_addresses == {}
        assert port.poe_config.usage == 1.0

    def test_trunk(self):
        port = Port("A1", True, trunk_name="Trk1")
        assert port.is_in_trunk
        assert port.trunk_name == "Trk1"

    def test_poe_config_copied(self):
        """Assigning a PoE config should store a copy."""
        config = PoEConfig(True, 15.4, 1.0)
        port = Port("A1", True, poe=config)
        config.usage = 2.0
        assert port.poe_config.usage == 1.0

    def test_enable_disable(self):
        port = Port("A1", False)
        port.enable()
        assert port.enabled
        port.disable()
        assert not port.enabled

    def test_attach_vlan_copies(self):
        """attach_vlan should store and return an independent copy."""
        catalog = Vlan(10, "data")
        port = Port("A1", True)
        attached = port.attach_vlan(catalog)
        attached.devices("aa:bb:cc:dd:ee:ff")

        assert port.vlans[10] is attached
        assert attached is not catalog
        assert catalog.mac_addresses == {}


class TestVlan:
    """Test Vlan."""

    def test_name_stripped(self):
        assert Vlan(10, " data ").name == "data"

    def test_neighbors_pseudo_vlan(self):
        assert Vlan(Vlan.NEIGHBORS).is_neighbors
        assert not Vlan(1).is_neighbors

    def test_devices_created_once(self):
        vlan = Vlan(10)
        first = vlan.devices("aa:bb:cc:dd:ee:ff")
        assert vlan.devices("aa:bb:cc:dd:ee:ff") is first

    def test_copy_isolated(self, source):
        """A copy should not share the MAC mapping nor the device lists."""
        vlan = Vlan(10, "data")
        vlan.devices("aa:bb:cc:dd:ee:ff").append(ConnectedDevice(source))
        clone = vlan.copy()
        clone.devices("aa:bb:cc:dd:ee:ff").append(ConnectedDevice(source))
        clone.devices("00:11:22:33:44:55")

        assert len(vlan.mac_addresses["aa:bb:cc:dd:ee:ff"]) == 1
        assert list(vlan.mac_addresses) == ["aa:bb:cc:dd:ee:ff"]
        assert clone.name == "data"


class TestConnectedDevice:
    """Test ConnectedDevice presence semantics."""

    def test_all_unset(self, source):
        """A fresh device reports every field as absent."""
        device = ConnectedDevice(source)
        assert device.source is source
        assert not device.has_mac_address
        assert not device.has_ip_address
        assert not device.has_port_name
        assert not device.has_sysname
        assert not device.has_time

    @pytest.mark.parametrize("attr", ["mac_address", "ip_address", "port_name", "sysname", "time"])
    def test_unset_read_raises(self, source, attr):
        with pytest.raises(InvariantViolation):
            getattr(ConnectedDevice(source), attr)

    def test_build_sets_given_fields(self, source):
        when = datetime(2024, 1, 1)
        device = ConnectedDevice.build(source, "AA-BB-CC-DD-EE-FF", ip="10.0.0.1", port=" 25 ", sysname="sw", time=when)

        assert device.mac_address == "aa:bb:cc:dd:ee:ff"
        assert device.ip_address == "10.0.0.1"
        assert device.port_name == "25"
        assert device.sysname == "sw"
        assert device.time == when

    def test_unknown_mac_stays_unset(self, source):
        assert not ConnectedDevice(source, UNKNOWN_MAC).has_mac_address

    @pytest.mark.parametrize("attr", ["port_name", "sysname"])
    def test_empty_strings_rejected(self, source, attr):
        device = ConnectedDevice(source)
        with pytest.raises(InvariantViolation):
            setattr(device, attr, "")

    def test_invalid_values_rejected(self, source):
        device = ConnectedDevice(source)
        with pytest.raises(MalformedAddress):
            device.ip_address = "10.0.0"
        with pytest.raises(MalformedMac):
            device.mac_address = "aa:bb"


class TestDataSource:
    """Test DataSource lookups."""

    def test_single_record_as_list(self):
        source = DataSource("dhcp", {"aa:bb:cc:dd:ee:ff": {"ip": "10.0.0.1"}})
        assert source.lookup("aa:bb:cc:dd:ee:ff") == [EnrichmentRecord(ip="10.0.0.1")]

    def test_list_of_records(self):
        records = [EnrichmentRecord(sysname="a"), {"sysname": "b"}]
        source = DataSource("dhcp", {"aa:bb:cc:dd:ee:ff": records})
        assert [r.sysname for r in source.lookup("aa:bb:cc:dd:ee:ff")] == ["a", "b"]

    def test_mac_keys_canonicalized(self):
        """Keys and lookups in any MAC spelling should meet."""
        source = DataSource("dhcp", {"AABB.CCDD.EEFF": {"sysname": "pc"}})
        assert source.lookup("aa-bb-cc-dd-ee-ff")[0].sysname == "pc"

    def test_ip_keys_canonicalized(self):
        source = DataSource("dns", {"FE80::0:1": {"sysname": "pc"}}, SourceKind.IP)
        assert source.lookup("fe80::1")[0].sysname == "pc"

    def test_missing_and_malformed_keys(self):
        """Absent or unparsable keys yield no records."""
        source = DataSource("dhcp", {"aa:bb:cc:dd:ee:ff": {}})
        assert source.lookup("00:11:22:33:44:55") == []
        assert source.lookup("unknown") == []

    def test_malformed_table_key_rejected(self):
        with pytest.raises(MalformedMac):
            DataSource("dhcp", {"not-a-mac": {}})

    def test_data_left_as_given(self):
        data = {"AA:BB:CC:DD:EE:FF": {"sysname": "pc"}}
        assert DataSource("dhcp", data).data is data

    def test_protocol_kind_has_no_lookups(self):
        source = DataSource("LLDP", {"A1": object()}, SourceKind.PROTOCOL)
        assert source.lookup("A1") == []


class TestVlanEntry:
    def test_has_member(self):
        entry = VlanEntry(vlan=Vlan(10), members=[VlanMember(name="A1", mode="Untagged")])
        assert entry.has_member("A1")
        assert not entry.has_member("A2")
