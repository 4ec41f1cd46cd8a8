from .messages import MESSAGE_TEMPLATES, select_template, format_battle_message
from .combat_log import CombatLogger
