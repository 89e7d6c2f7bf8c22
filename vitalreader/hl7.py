"""Simulated HL7 ORU^R01 traffic from a patient monitor and ventilator."""

from __future__ import annotations

import time
from datetime import datetime
from typing import BinaryIO, NamedTuple, Optional

_MMHG = "mm[Hg]^millimeter of mercury^UCUM"
_PERCENT = "%^percent^UCUM"
_BPM = "bpm^beats/min^UCUM"
_PER_MIN = "/min^per minute^UCUM"
_CELSIUS = "Cel^degree Celsius^UCUM"
_L_PER_MIN = "L/min^liter/minute^UCUM"
_CM_H2O = "cm[H2O]^centimeter of water^UCUM"
_ML = "mL^milliliter^UCUM"

_DOCTOR = "123456^SMITH^ROBERT^A^^^DR"

_PID = (
    "PID|1||123456^^^HOSPITAL^MR||DOE^JOHN^A||19800515|M|||123 MAIN ST^^PARIS^^75001^FR"
    "||(00)000000000||FR|M|CAT|||[national-id]\r"
)
_PV1 = (
    f"PV1|1|I|ICU^101^01^HOSPITAL||||{_DOCTOR}|||SUR||||ADM|||{_DOCTOR}"
    "||V123456|||||||||||||||||||||||||20250103080000\r"
)

_HEADER_PAUSE = 0.1
_OBSERVATION_PAUSE = 0.05


def _nm(code: str, name: str, value: str, units: str, normal: str) -> str:
    return f"NM|{code}^{name}^LN||{value}|{units}|{normal}|N|||F"


def _st(code: str, name: str, value: str) -> str:
    return f"ST|{code}^{name}^LN||{value}|||||N|||F"


_GE_OBSERVATIONS = [
    (_nm("8867-4", "Heart Rate", "72", _BPM, "60-100"), "GE_MONITOR^ECG_MODULE"),
    (_st("8884-9", "ECG Rhythm", "NSR"), "GE_MONITOR^ECG_MODULE"),
    (_nm("9279-1", "Respiratory Rate", "16", _PER_MIN, "12-20"), "GE_MONITOR^RESP_MODULE"),
    (_nm("8480-6", "Systolic BP", "125", _MMHG, "90-140"), "GE_MONITOR^PNI_MODULE"),
    (_nm("8462-4", "Diastolic BP", "78", _MMHG, "60-90"), "GE_MONITOR^PNI_MODULE"),
    (_nm("8478-0", "Mean BP", "93", _MMHG, "70-105"), "GE_MONITOR^PNI_MODULE"),
    (_nm("2708-6", "Oxygen Saturation", "98", _PERCENT, "95-100"), "GE_MONITOR^SPO2_MODULE"),
    (_nm("8889-8", "Pulse Rate", "73", _BPM, "60-100"), "GE_MONITOR^SPO2_MODULE"),
    (_nm("8310-5", "Body Temperature", "36.8", _CELSIUS, "36.0-37.5"), "GE_MONITOR^TEMP_MODULE"),
    (_nm("76213-3", "Arterial Systolic BP", "122", _MMHG, "90-140"), "GE_MONITOR^PI_MODULE"),
    (_nm("76214-1", "Arterial Diastolic BP", "75", _MMHG, "60-90"), "GE_MONITOR^PI_MODULE"),
    (_nm("76215-8", "Arterial Mean BP", "91", _MMHG, "70-105"), "GE_MONITOR^PI_MODULE"),
    (_nm("8741-1", "Cardiac Output", "5.2", _L_PER_MIN, "4.0-8.0"), "GE_MONITOR^DC_MODULE"),
    (
        _nm("8842-7", "Cardiac Index", "2.8", "L/min/m2^liter/minute/meter^2^UCUM", "2.5-4.0"),
        "GE_MONITOR^DC_MODULE",
    ),
    (_nm("20562-5", "Stroke Volume", "72", _ML, "60-100"), "GE_MONITOR^DC_MODULE"),
    (_nm("19889-5", "End Tidal CO2", "38", _MMHG, "35-45"), "GE_MONITOR^CO2_MODULE"),
    (_nm("76270-3", "Respiratory Rate CO2", "16", _PER_MIN, "12-20"), "GE_MONITOR^CO2_MODULE"),
    (_nm("90371-9", "BIS Index", "45", "{score}^score^UCUM", "40-60"), "GE_MONITOR^BIS_MODULE"),
    (_nm("90372-7", "BIS Suppression Ratio", "5", _PERCENT, "0-10"), "GE_MONITOR^BIS_MODULE"),
    (_nm("93503-4", "EEG Alpha Power", "28", _PERCENT, "20-40"), "GE_MONITOR^EEG_MODULE"),
    (_nm("93504-2", "EEG Beta Power", "35", _PERCENT, "20-50"), "GE_MONITOR^EEG_MODULE"),
    (_nm("2713-6", "Mixed Venous O2 Sat", "72", _PERCENT, "60-80"), "GE_MONITOR^SVO2_MODULE"),
]

_VENTILATOR_OBSERVATIONS = [
    _nm("20112-9", "Tidal Volume", "450", _ML, "400-600"),
    _nm("20139-2", "Minute Volume", "7.2", _L_PER_MIN, "5.0-10.0"),
    _nm("76531-8", "Peak Pressure", "22", _CM_H2O, "15-30"),
    _nm("76530-0", "Plateau Pressure", "18", _CM_H2O, "10-25"),
    _nm("76248-9", "PEEP", "5", _CM_H2O, "3-10"),
    _nm("3150-0", "FiO2", "40", _PERCENT, "21-100"),
    _st("76334-7", "I:E Ratio", "1:2.5"),
]

_HUMIDIFIER_OBSERVATIONS = [
    _nm("8310-5", "Humidifier Temperature", "37.0", _CELSIUS, "36.0-38.0"),
    _nm("3143-5", "Relative Humidity", "95", _PERCENT, "80-100"),
    _nm("90401-4", "Water Level", "85", _PERCENT, "50-100"),
]


class _Segment(NamedTuple):
    label: str
    text: str
    pause: float


def _segments(timestamp: str) -> list[_Segment]:
    segments = [
        _Segment(
            "Sent",
            f"MSH|^~\\&|GE_MONITOR|ICU_01|VITAL_REC|HOSPITAL|{timestamp}||ORU^R01|"
            f"MSG{1:06}|P|2.5\r",
            _HEADER_PAUSE,
        ),
        _Segment("Sent", _PID, _HEADER_PAUSE),
        _Segment("Sent", _PV1, _HEADER_PAUSE),
        _Segment(
            "Sent",
            f"OBR|1|ORD123456|RES123456|VS^VITAL SIGNS^LOCAL|||{timestamp}||||||||{_DOCTOR}\r",
            _HEADER_PAUSE,
        ),
    ]

    set_id = 0

    def obx(body: str, source: str) -> str:
        nonlocal set_id
        set_id += 1
        return f"OBX|{set_id}|{body}|||{timestamp}||{source}\r"

    for body, source in _GE_OBSERVATIONS:
        segments.append(_Segment("Sent", obx(body, source), _OBSERVATION_PAUSE))

    segments.append(
        _Segment(
            "\nSent",
            f"OBR|2|VENT123456|VRES123456|VENT^VENTILATION^LOCAL|||{timestamp}||||||||{_DOCTOR}\r",
            _HEADER_PAUSE,
        )
    )
    for body in _VENTILATOR_OBSERVATIONS:
        segments.append(
            _Segment("Sent DRAGER Vent", obx(body, "DRAGER^VENTILATOR"), _OBSERVATION_PAUSE)
        )
    for body in _HUMIDIFIER_OBSERVATIONS:
        segments.append(
            _Segment("Sent DRAGER Hum", obx(body, "DRAGER^HUMIDIFIER"), _OBSERVATION_PAUSE)
        )
    return segments


def _now_stamp() -> str:
    return datetime.now().strftime("%Y%m%d%H%M%S")


def hl7_messages(timestamp: Optional[str] = None) -> list[str]:
    """Return every HL7 segment of the simulated message, each ending in CR."""
    return [segment.text for segment in _segments(timestamp or _now_stamp())]


def send_hl7(port: BinaryIO, delay: float = 1.0, timestamp: Optional[str] = None) -> list[str]:
    """Write the simulated HL7 message segment by segment; delay scales the pauses."""
    print("Sending comprehensive HL7 messages (Medical devices simulation)...\n")
    sent = []
    for segment in _segments(timestamp or _now_stamp()):
        port.write(segment.text.encode())
        port.flush()
        print(f"{segment.label}: {segment.text.strip()}")
        sent.append(segment.text)
        if delay:
            time.sleep(segment.pause * delay)
    print("\n✓ Complete HL7 message sent with all modules!")
    return sent