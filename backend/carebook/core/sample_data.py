"""Sample Data — starter records loaded when no data file exists yet."""

from carebook.core.care_store import CareStore
from carebook.core.domain_types import CaregiverId, RiskLevel, SeniorId
from carebook.core.person import Caregiver, PersonDetails, Senior


def sample_caregivers() -> list[Caregiver]:
    return [
        Caregiver(CaregiverId(1), PersonDetails(
            "John Tan", "90000001", "Blk 10 Jurong West St 65 #07-21",
            "Experienced with dementia care",
        )),
        Caregiver(CaregiverId(2), PersonDetails(
            "Mei Hui", "90000002", "Blk 620 Punggol Field Walk #08-23",
            "Bilingual (EN/MS)",
        )),
    ]


def sample_seniors(caregivers: list[Caregiver]) -> list[Senior]:
    john, mei_hui = caregivers
    return [
        Senior(SeniorId(1), PersonDetails(
            "Lim Ah Kow", "91234567", "Blk 123 Bedok North Rd #02-45", "Has dementia",
        ), RiskLevel.HIGH, mei_hui),
        Senior(SeniorId(2), PersonDetails(
            "Mdm Tan", "98887766", "Blk 88 Hougang Ave 7 #05-12", "Lives alone",
        ), RiskLevel.MEDIUM),
        Senior(SeniorId(3), PersonDetails(
            "Ong Siew Ling", "97776655", "Blk 321 Clementi Ave 5 #03-09",
        ), RiskLevel.LOW, john),
        Senior(SeniorId(4), PersonDetails(
            "Siti Nurhaliza", "93330011", "Blk 20 Toa Payoh Lor 7 #09-10", "Fall risk",
        ), RiskLevel.HIGH),
    ]


def load_sample_data(store: CareStore) -> None:
    """Replace store contents with the sample records; ids continue after them."""
    caregivers = sample_caregivers()
    store.reset_data(sample_seniors(caregivers), caregivers)
