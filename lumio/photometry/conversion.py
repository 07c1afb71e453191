from __future__ import annotations

import logging

from lumio.models.eulumdat import EulumdatDocument
from lumio.models.ies import IESDocument, IESFormat, IESTilt
from lumio.parser.errors import ConversionError, UnsupportedConversion
from lumio.photometry.symmetry import split_planes

logger = logging.getLogger(__name__)


def eulumdat_to_ies(ldt: EulumdatDocument) -> IESDocument:
    """
    Map a EULUMDAT document onto a new LM-63-2002 document.

    Only the first lamp set is carried over. Intensities are copied plane by
    plane without unit conversion, so the candela multiplier stays 1; the
    horizontal angle list and photometric type are fixed placeholders.
    """
    if ldt.num_lamp_sets < 1 or not ldt.lamp_counts:
        raise ConversionError("EULUMDAT document has no lamp set to map onto IES lamp fields")
    if ldt.num_lamp_sets > 1:
        logger.info("dropping %d additional lamp sets during conversion", ldt.num_lamp_sets - 1)

    try:
        planes = split_planes(ldt.intensity_raw, ldt.symmetry, ldt.num_c_planes, ldt.num_g_angles)
    except ValueError as e:
        raise ConversionError(str(e)) from e

    ies = IESDocument(format=IESFormat.LM_63_2002, tilt=IESTilt.NONE)
    ies.keywords = {
        "TEST": ldt.report_number,
        "TESTLAB": ldt.company,
        "ISSUEDATE": ldt.date_user,
        "MANUFAC": ldt.company,
        "LUMINAIRE": ldt.luminaire_name,
        "LUMCAT": ldt.luminaire_number,
        "LAMP": ldt.lamp_types[0],
        "OTHER": f"converted from EULUMDAT: {ldt.filename}",
    }

    ies.num_lamps = ldt.lamp_counts[0]
    ies.lumens_per_lamp = ldt.lamp_flux[0]
    ies.candela_multiplier = 1.0
    ies.num_vertical_angles = len(ldt.angles_g)
    ies.num_horizontal_angles = 1
    ies.photometric_type = 1
    ies.units_type = 2
    ies.width = ldt.width_mm
    ies.length = ldt.length_mm
    ies.height = ldt.height_mm
    ies.ballast_factor = 1.0
    ies.future_use = 1.0
    ies.input_watts = ldt.ballast_watts[0]

    ies.vertical_angles = list(ldt.angles_g)
    ies.horizontal_angles = [0.0]
    ies.candela_values = [list(row) for row in planes]
    return ies


def ies_to_eulumdat(ies: IESDocument) -> EulumdatDocument:
    raise UnsupportedConversion("Conversion from IES to EULUMDAT is not supported")
