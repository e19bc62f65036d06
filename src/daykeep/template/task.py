# SPDX-License-Identifier: MIT

import pendulum

from daykeep.model.task import Task
from daykeep.time import today_local


def get_task_template() -> Task:
    return {
        "id": None,
        "description": "",
        "date": today_local(),
        "start": pendulum.time(0, 0),
        "end": pendulum.time(0, 0),
        "completed": False,
    }
