from typing import Dict

from core.calculator import StandardRules
from core.models import Standard
from standards.iec import IECRules
from standards.nec import NECRules

RULES: Dict[Standard, StandardRules] = {
    Standard.IEC: IECRules(),
    Standard.NEC: NECRules(),
}

_missing = [s.value for s in Standard if s not in RULES]
if _missing:
    raise RuntimeError(f"No rules registered for standard(s): {', '.join(_missing)}")


def rules_for(standard: Standard) -> StandardRules:
    return RULES[standard]
