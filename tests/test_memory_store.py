import unittest

from app.db.repositories.memory import MemoryStore, MemoryTodoRepository, MemoryCategoryRepository


class TestMemoryStore(unittest.TestCase):
    def setUp(self):
        self.store = MemoryStore()
        self.todos = MemoryTodoRepository(self.store)
        self.categories = MemoryCategoryRepository(self.store)

    def test_returned_entities_are_copies(self):
        todo = self.todos.create(title="a", description="a")
        todo.title = "changed"
        self.assertEqual(self.todos.get(todo.id).title, "a")

    def test_stores_are_independent(self):
        self.todos.create(title="a", description="a")
        other = MemoryTodoRepository(MemoryStore())
        self.assertEqual(other.list_all(), [])
        self.assertEqual(other.create(title="b", description="b").id, 1)

    def test_update_after_delete_returns_none(self):
        todo = self.todos.create(title="a", description="a")
        self.todos.delete(todo)
        self.assertIsNone(self.todos.update(todo, title="b"))
        self.assertIsNone(self.todos.toggle_done(todo))

    def test_category_delete_removes_links(self):
        todo = self.todos.create(title="a", description="a")
        category = self.categories.create(name="C")
        self.categories.connect_todos(category, [todo.id])
        self.categories.delete(category)
        self.assertEqual(self.store.links, set())
        self.assertEqual(self.todos.get(todo.id).categories, [])

    def test_delete_twice_reports_absence(self):
        todo = self.todos.create(title="a", description="a")
        category = self.categories.create(name="C")
        self.assertTrue(self.todos.delete(todo))
        self.assertFalse(self.todos.delete(todo))
        self.assertTrue(self.categories.delete(category))
        self.assertFalse(self.categories.delete(category))

    def test_connect_to_deleted_category_returns_none(self):
        todo = self.todos.create(title="a", description="a")
        category = self.categories.create(name="C")
        self.categories.delete(category)
        self.assertIsNone(self.categories.connect_todos(category, [todo.id]))
        self.assertEqual(self.store.links, set())
