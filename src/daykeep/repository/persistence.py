# SPDX-License-Identifier: MIT

import logging
import os
import stat
import tempfile
from pathlib import Path
from typing import Any, cast

from yaml import YAMLError, dump, load

try:
    from yaml import CDumper as Dumper
    from yaml import CLoader as Loader
except ImportError:
    from yaml import Dumper, Loader  # type: ignore[assignment]

from daykeep.errors import PersistenceFailure, ValidationError
from daykeep.model.task import Task
from daykeep.repository.task import TaskStore
from daykeep.time import date_from_value, date_to_str, time_from_value, time_to_str

logger = logging.getLogger(__name__)

DATA_FORMAT_VERSION = 1


class PersistenceGateway:
    """Loads and saves the whole store as a single YAML document."""

    def __init__(self, path: Path) -> None:
        self.path = path

    def exists(self) -> bool:
        return self.path.is_file()

    def load(self) -> TaskStore:
        if not self.exists():
            logger.info("no data file at %s, starting empty", self.path)
            return TaskStore()
        try:
            raw = load(self.path.read_text(encoding="utf-8"), Loader=Loader)
        except (OSError, UnicodeDecodeError, YAMLError) as e:
            logger.error("could not read %s: %s", self.path, e)
            raise PersistenceFailure(f"Could not read {self.path}: {e}") from e

        if raw is None:
            return TaskStore()
        try:
            return self.__convert_store_for_deserialization(raw)
        except (KeyError, TypeError, ValueError, ValidationError) as e:
            logger.error("malformed data in %s: %s", self.path, e)
            raise PersistenceFailure(f"Malformed data in {self.path}: {e}") from e

    def save(self, store: TaskStore) -> None:
        """
        Write the snapshot to a temporary file beside the target, then
        replace the target with it so a crash never leaves half a file.

        A symlinked data file is followed, so the link itself survives, and
        the permissions of an existing file carry over to the new one.
        """
        content = dump(
            self.__convert_store_for_serialization(store),
            Dumper=Dumper,
            allow_unicode=True,
            sort_keys=False,
        )
        target = self.path.resolve()
        temp_name = None
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                mode="w",
                encoding="utf-8",
                dir=target.parent,
                prefix=f".{target.name}.",
                suffix=".tmp",
                delete=False,
            ) as tf:
                temp_name = tf.name
                tf.write(content)
                tf.flush()
                os.fsync(tf.fileno())
            if target.is_file():
                os.chmod(temp_name, stat.S_IMODE(target.stat().st_mode))
            os.replace(temp_name, target)
        except OSError as e:
            logger.error("could not write %s: %s", self.path, e)
            if temp_name is not None and os.path.exists(temp_name):
                os.unlink(temp_name)
            raise PersistenceFailure(f"Could not write {self.path}: {e}") from e

        store.mark_clean()
        logger.info("saved %d tasks to %s", len(store), target)

    def __convert_store_for_serialization(self, store: TaskStore) -> dict[str, Any]:
        return {
            "version": DATA_FORMAT_VERSION,
            "next_id": store.next_id,
            "tasks": [
                self.__convert_task_for_serialization(task)
                for task in store.all_tasks()
            ],
            "notes": store.notes(),
        }

    def __convert_task_for_serialization(self, task: Task) -> dict[str, Any]:
        serializable_task = cast(dict[str, Any], task)
        serializable_task["date"] = date_to_str(task["date"])
        serializable_task["start"] = time_to_str(task["start"])
        serializable_task["end"] = time_to_str(task["end"])
        return serializable_task

    def __convert_store_for_deserialization(self, raw: Any) -> TaskStore:
        if not isinstance(raw, dict):
            raise TypeError(f"expected a mapping, got {type(raw).__name__}")
        raw_tasks = raw.get("tasks") or []
        if not isinstance(raw_tasks, list):
            raise TypeError(f"expected a list of tasks, got {type(raw_tasks).__name__}")
        tasks = [
            self.__convert_task_for_deserialization(raw_task) for raw_task in raw_tasks
        ]
        return TaskStore(
            tasks=tasks,
            notes=str(raw.get("notes") or ""),
            next_id=int(raw.get("next_id") or 1),
        )

    def __convert_task_for_deserialization(self, raw_task: Any) -> Task:
        if not isinstance(raw_task, dict):
            raise TypeError(f"expected a task mapping, got {type(raw_task).__name__}")
        return {
            "id": int(raw_task["id"]),
            "description": str(raw_task["description"]),
            "date": date_from_value(raw_task["date"]),
            "start": time_from_value(raw_task["start"]),
            "end": time_from_value(raw_task["end"]),
            "completed": bool(raw_task.get("completed", False)),
        }
