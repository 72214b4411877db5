from .summary import summary_section
from .logs import fixed_costs_section, logs_section
from .debts import debts_section
from .holidays import holidays_section
from .backup import backup_section
from .trends import trends_section
