"""Unit tests for task use cases, run against the in-memory adapters."""

import unittest
from unittest.mock import MagicMock

from adapter.fake.task_repository import FakeTaskRepository
from adapter.fake.user_repository import FakeUserRepository
from domain.model.errors import ErrorKind, NotFoundError, UnauthorizedError, ValidationError
from domain.model.task import Pagination, TaskStatus
from services.task_service import (
    CreateTaskInput,
    CreateTaskService,
    DeleteTaskInput,
    DeleteTaskService,
    GetTaskForUserService,
    GetTaskInput,
    ListTasksForUserService,
    ListTasksInput,
    UpdateTaskInput,
    UpdateTaskService,
    UpdateTaskStatusInput,
    UpdateTaskStatusService,
)


class TaskServiceTestCase(unittest.TestCase):

    def setUp(self):
        self.tasks = FakeTaskRepository()
        self.users = FakeUserRepository()
        self.user_id = self.users.create(email='test@example.com', password_hash='h', name='Test').id
        self.other_id = self.users.create(email='other@example.com', password_hash='h').id

    def _create(self, title='Test Task', description='Test Description', **kwargs):
        service = CreateTaskService(self.tasks, self.users)
        return service.execute(CreateTaskInput(
            title=title,
            description=description,
            user_id=kwargs.pop('user_id', self.user_id),
            **kwargs,
        ))


class TestCreateTaskService(TaskServiceTestCase):

    def test_create_task(self):
        task = self._create()

        self.assertEqual(task.title, 'Test Task')
        self.assertEqual(task.description, 'Test Description')
        self.assertEqual(task.status, TaskStatus.TODO)
        self.assertEqual(task.user_id, self.user_id)

    def test_title_and_description_are_trimmed(self):
        task = self._create(title='  Buy milk  ', description='  2% please  ')

        stored = self.tasks.get_by_id(task.id)
        self.assertEqual(stored.title, 'Buy milk')
        self.assertEqual(stored.description, '2% please')

    def test_missing_description_defaults_to_empty(self):
        task = self._create(description=None)
        self.assertEqual(task.description, '')

    def test_provided_status(self):
        task = self._create(status=TaskStatus.IN_PROGRESS)
        self.assertEqual(task.status, TaskStatus.IN_PROGRESS)

    def test_empty_title(self):
        for title in ['', '   ']:
            with self.subTest(title=title):
                with self.assertRaises(ValidationError):
                    self._create(title=title)

    def test_unknown_user_fails_before_any_write(self):
        tasks = MagicMock()
        service = CreateTaskService(tasks, self.users)

        with self.assertRaises(NotFoundError):
            service.execute(CreateTaskInput(title='Task', user_id='non-existent-user'))

        tasks.create.assert_not_called()

    def test_unknown_user_checked_before_title(self):
        with self.assertRaises(NotFoundError):
            self._create(title='', user_id='non-existent-user')


class TestGetTaskForUserService(TaskServiceTestCase):

    def test_get_own_task(self):
        task = self._create()
        found = GetTaskForUserService(self.tasks, self.users).execute(
            GetTaskInput(task_id=task.id, user_id=self.user_id))
        self.assertEqual(found, task)

    def test_other_users_task(self):
        task = self._create()
        with self.assertRaises(UnauthorizedError):
            GetTaskForUserService(self.tasks, self.users).execute(
                GetTaskInput(task_id=task.id, user_id=self.other_id))


class TestUpdateTaskService(TaskServiceTestCase):

    def setUp(self):
        super().setUp()
        self.task = self._create()
        self.service = UpdateTaskService(self.tasks, self.users)

    def test_partial_update_changes_only_supplied_fields(self):
        updated = self.service.execute(UpdateTaskInput(
            task_id=self.task.id, user_id=self.user_id, title='  Updated Title  '))

        self.assertEqual(updated.title, 'Updated Title')
        self.assertEqual(updated.description, 'Test Description')
        self.assertEqual(updated.status, TaskStatus.TODO)

    def test_update_all_fields(self):
        updated = self.service.execute(UpdateTaskInput(
            task_id=self.task.id,
            user_id=self.user_id,
            title='New',
            description=' New description ',
            status=TaskStatus.DONE,
        ))

        self.assertEqual(updated.title, 'New')
        self.assertEqual(updated.description, 'New description')
        self.assertEqual(updated.status, TaskStatus.DONE)

    def test_description_can_be_cleared(self):
        updated = self.service.execute(UpdateTaskInput(
            task_id=self.task.id, user_id=self.user_id, description='   '))
        self.assertEqual(updated.description, '')

    def test_blank_title_rejected(self):
        with self.assertRaises(ValidationError):
            self.service.execute(UpdateTaskInput(task_id=self.task.id, user_id=self.user_id, title='  '))
        self.assertEqual(self.tasks.get_by_id(self.task.id).title, 'Test Task')

    def test_unknown_user(self):
        with self.assertRaises(NotFoundError) as ctx:
            self.service.execute(UpdateTaskInput(task_id=self.task.id, user_id='non-existent', title='x'))
        self.assertEqual(str(ctx.exception), 'User not found')

    def test_unknown_task(self):
        with self.assertRaises(NotFoundError) as ctx:
            self.service.execute(UpdateTaskInput(task_id='non-existent', user_id=self.user_id, title='x'))
        self.assertEqual(str(ctx.exception), 'Task not found')

    def test_unknown_user_reported_before_unknown_task(self):
        with self.assertRaises(NotFoundError) as ctx:
            self.service.execute(UpdateTaskInput(task_id='non-existent', user_id='non-existent', title='x'))
        self.assertEqual(str(ctx.exception), 'User not found')


class TestUpdateTaskStatusService(TaskServiceTestCase):

    def test_unrestricted_transitions(self):
        task = self._create()
        service = UpdateTaskStatusService(self.tasks, self.users)

        for status in [TaskStatus.DONE, TaskStatus.IN_PROGRESS, TaskStatus.TODO]:
            with self.subTest(status=status):
                updated = service.execute(UpdateTaskStatusInput(
                    task_id=task.id, user_id=self.user_id, status=status))
                self.assertEqual(updated.status, status)

    def test_unknown_task(self):
        with self.assertRaises(NotFoundError):
            UpdateTaskStatusService(self.tasks, self.users).execute(UpdateTaskStatusInput(
                task_id='non-existent', user_id=self.user_id, status=TaskStatus.DONE))


class TestOwnershipGuard(TaskServiceTestCase):
    """A non-owner can never mutate a task."""

    def setUp(self):
        super().setUp()
        self.task = self._create()

    def _assert_unchanged(self):
        self.assertEqual(self.tasks.get_by_id(self.task.id), self.task)

    def test_update_by_non_owner(self):
        with self.assertRaises(UnauthorizedError) as ctx:
            UpdateTaskService(self.tasks, self.users).execute(UpdateTaskInput(
                task_id=self.task.id, user_id=self.other_id, title='Hijacked'))
        self.assertEqual(ctx.exception.kind, ErrorKind.UNAUTHORIZED)
        self._assert_unchanged()

    def test_update_status_by_non_owner(self):
        with self.assertRaises(UnauthorizedError):
            UpdateTaskStatusService(self.tasks, self.users).execute(UpdateTaskStatusInput(
                task_id=self.task.id, user_id=self.other_id, status=TaskStatus.DONE))
        self._assert_unchanged()

    def test_delete_by_non_owner(self):
        with self.assertRaises(UnauthorizedError) as ctx:
            DeleteTaskService(self.tasks, self.users).execute(DeleteTaskInput(
                task_id=self.task.id, user_id=self.other_id))
        self.assertIn('Cannot delete', str(ctx.exception))
        self._assert_unchanged()


class TestListTasksForUserService(TaskServiceTestCase):

    def setUp(self):
        super().setUp()
        self.service = ListTasksForUserService(self.tasks, self.users)

    def test_cursor_pagination(self):
        for i in range(3):
            self._create(title=f'Task {i}')

        first = self.service.execute(ListTasksInput(user_id=self.user_id, pagination=Pagination(limit=2)))
        self.assertEqual(len(first.items), 2)
        self.assertIsNotNone(first.next_cursor)

        second = self.service.execute(ListTasksInput(
            user_id=self.user_id, pagination=Pagination(limit=2, cursor=first.next_cursor)))
        self.assertEqual(len(second.items), 1)
        self.assertIsNone(second.next_cursor)

        seen = {t.id for t in first.items} | {t.id for t in second.items}
        self.assertEqual(len(seen), 3)

    def test_status_filter(self):
        self._create(title='todo')
        self._create(title='done', status=TaskStatus.DONE)

        page = self.service.execute(ListTasksInput(user_id=self.user_id, status=TaskStatus.DONE))
        self.assertEqual([t.title for t in page.items], ['done'])

    def test_only_own_tasks(self):
        self._create()
        self._create(user_id=self.other_id)

        page = self.service.execute(ListTasksInput(user_id=self.user_id))
        self.assertEqual(len(page.items), 1)

    def test_unknown_user(self):
        with self.assertRaises(NotFoundError):
            self.service.execute(ListTasksInput(user_id='non-existent'))


class TestDeleteTaskService(TaskServiceTestCase):

    def test_delete(self):
        task = self._create()
        DeleteTaskService(self.tasks, self.users).execute(DeleteTaskInput(task_id=task.id, user_id=self.user_id))
        self.assertIsNone(self.tasks.get_by_id(task.id))

    def test_unknown_task(self):
        with self.assertRaises(NotFoundError):
            DeleteTaskService(self.tasks, self.users).execute(
                DeleteTaskInput(task_id='non-existent', user_id=self.user_id))


if __name__ == '__main__':
    unittest.main()
