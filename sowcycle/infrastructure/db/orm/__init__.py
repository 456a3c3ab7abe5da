from sowcycle.infrastructure.db.orm import (  # noqa: F401
    alert,
    breeding_record,
    notification,
    pen,
    pig,
    pig_birth_history,
    piglet_record,
)
