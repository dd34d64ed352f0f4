from fxruntime.occupancy_v1 import EMPTY, Occupied, OccupancySlotV1


def test_slot_admits_one_holder():
    slot = OccupancySlotV1("swimmer")
    assert slot.empty
    assert slot.occupy("diver")
    assert slot.occupy("diver")
    assert not slot.occupy("mermaid")
    assert slot.value == Occupied("diver")


def test_only_the_holder_can_vacate():
    slot = OccupancySlotV1()
    slot.occupy("diver")
    assert not slot.vacate("mermaid")
    assert slot.holder() == "diver"
    assert slot.vacate("diver")
    assert slot.value is EMPTY
    assert slot.occupy("mermaid")
    slot.clear()
    assert slot.holder() is None
