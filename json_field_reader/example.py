"""Sample cgminer `stats` reply and the fields read from it."""
from __future__ import annotations

from typing import Dict, Optional, TextIO

from .fields import FieldCollection, new_collection, populate
from .reporting import DEFAULT_NAME_WIDTH, print_report

EXAMPLE_DOCUMENT = (
    b'{"STATUS":[{"STATUS":"S","When":1626178788,"Code":70,"Msg":"BMMiner stats","Description":"bmminer 1.0.0"}],'
    b'"STATS":[{"BMMiner":"2.0.0 rwglr","Miner":"30.0.1.3","CompileTime":"Fri Jul 9 18:31:39 UTC 2021",'
    b'"Type":"Antminer S9 Hiveon"},{"STATS":0,"ID":"BC50","Elapsed":4271,"Calls":0,"Wait":0,"Max":0,'
    b'"Min":99999999,"GHS 5s":"5904.657","GHS av":5847.82,"miner_count":2,"frequency":"412","fan_num":2,'
    b'"fan1":0,"fan2":0,"fan3":0,"fan4":0,"fan5":4080,"fan6":4920,"fan7":0,"fan8":0,"temp_num":2,'
    b'"temp6":53,"temp7":52,"temp2_6":68,"temp2_7":67,"freq_avg6":412,"freq_avg7":411.46,'
    b'"total_rateideal":5914.09,"total_freqavg":411.73,"total_acn":126,"total_rate":5904.65,'
    b'"chain_rateideal6":2958.98,"chain_rateideal7":2955.1,"temp_max":68,"Device Hardware%":0.0001,'
    b'"no_matching_work":7,"chain_acn6":63,"chain_acn7":63,'
    b'"chain_acs6":" oooooooo oooooooo oooooooo oooooooo oooooooo oooooooo oooooooo ooooooo",'
    b'"chain_acs7":" oooooooo oooooooo oooooooo oooooooo oooooooo oooooooo oooooooo ooooooo",'
    b'"chain_hw6":6,"chain_hw7":1,"chain_rate1":"","chain_rate6":"2948.61","chain_rate7":"2956.04",'
    b'"chain_xtime6":"{X5=1,X22=1,X43=1}","chain_xtime7":"{X54=1}","chain_offside_6":"0","chain_offside_7":"0",'
    b'"chain_opencore_6":"0","chain_opencore_7":"0","miner_version":"30.0.1.3",'
    b'"chain_power6":234.84,"chain_power7":221.94,"chain_power":"456.78 (AB)"}],"id":1}'
)

EXAMPLE_FIELDS: Dict[str, str] = {
    "GHS 5s": ".STATS.[1].GHS 5s",            # "5904.657"
    "GHS av": ".STATS.[1].GHS av",            # 5847.82
    "chain power": ".STATS.[1].chain_power",  # "456.78 (AB)"
    "chain_rate1": ".STATS.[1].chain_rate1",  # ""
}


def run_example(
    stream: Optional[TextIO] = None,
    on_extract_error: str = 'empty',
    name_width: int = DEFAULT_NAME_WIDTH,
) -> FieldCollection:
    collection = new_collection(EXAMPLE_FIELDS)
    populate(collection, EXAMPLE_DOCUMENT, on_extract_error=on_extract_error)
    print_report(collection, stream=stream, name_width=name_width)
    return collection
