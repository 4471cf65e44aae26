from __future__ import annotations

import os
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from _testutil import ensure_repo_on_path, make_store


class TestStoreResolver(unittest.TestCase):
    def test_requires_existing_root(self) -> None:
        ensure_repo_on_path()

        from passtree.errors import NotFoundError
        from passtree.store import StoreResolver

        with tempfile.TemporaryDirectory() as td:
            with self.assertRaises(NotFoundError):
                StoreResolver(str(Path(td) / "some" / "random" / "dir"))

            f = Path(td) / "not-a-dir"
            f.write_text("x", encoding="utf-8")
            with self.assertRaises(NotFoundError):
                StoreResolver(str(f))

    def test_default_root_is_password_store_under_home(self) -> None:
        ensure_repo_on_path()

        from passtree.store import StoreResolver

        with tempfile.TemporaryDirectory() as td:
            home = Path(td)
            (home / ".password-store").mkdir()
            with mock.patch("pathlib.Path.home", return_value=home):
                resolver = StoreResolver("")
            self.assertEqual(resolver.root, (home / ".password-store").resolve())

    def test_path_for_basic(self) -> None:
        ensure_repo_on_path()

        from passtree.store import StoreResolver

        with tempfile.TemporaryDirectory() as td:
            root = make_store(Path(td) / "store", ["hello-there", "email/work"])
            resolver = StoreResolver(str(root))

            self.assertEqual(resolver.path_for("hello-there"), resolver.root / "hello-there.gpg")
            self.assertEqual(resolver.path_for("email/work"), resolver.root / "email" / "work.gpg")

    def test_path_for_rejects_nonexistent_name(self) -> None:
        ensure_repo_on_path()

        from passtree.errors import NotFoundError
        from passtree.store import StoreResolver

        with tempfile.TemporaryDirectory() as td:
            root = make_store(Path(td) / "store", ["hello-there"])
            resolver = StoreResolver(str(root))
            with self.assertRaises(NotFoundError):
                resolver.path_for("general-kenobi")

            # Containment still applies to entries that do not exist yet.
            self.assertEqual(
                resolver.path_for("general/kenobi", must_exist=False),
                resolver.root / "general" / "kenobi.gpg",
            )

    def test_path_for_allows_dots_in_basename(self) -> None:
        ensure_repo_on_path()

        from passtree.store import StoreResolver

        with tempfile.TemporaryDirectory() as td:
            root = make_store(Path(td) / "store", ["klaus.txt"])
            resolver = StoreResolver(str(root))
            self.assertEqual(resolver.path_for("klaus.txt"), resolver.root / "klaus.txt.gpg")

    def test_path_for_allows_dotdot_that_stays_inside(self) -> None:
        ensure_repo_on_path()

        from passtree.store import StoreResolver

        with tempfile.TemporaryDirectory() as td:
            root = make_store(Path(td) / "store", ["hello-there", "general/kenobi/x"])
            resolver = StoreResolver(str(root))
            self.assertEqual(
                resolver.path_for("general/kenobi/../../hello-there"),
                resolver.root / "hello-there.gpg",
            )

    def test_path_for_rejects_dotdot_escape(self) -> None:
        ensure_repo_on_path()

        from passtree.errors import PathEscapeError
        from passtree.store import StoreResolver

        with tempfile.TemporaryDirectory() as td:
            root = make_store(Path(td) / "store", ["general/kenobi/x"])
            outside = make_store(Path(td) / "escape-path", ["klaus"])

            # The escaped-to entry is reachable from its own store.
            StoreResolver(str(outside)).path_for("klaus")

            resolver = StoreResolver(str(root))
            with self.assertRaises(PathEscapeError):
                resolver.path_for("general/kenobi/../../../escape-path/klaus")
            with self.assertRaises(PathEscapeError):
                resolver.path_for(str(outside.resolve() / "klaus"))

    def test_path_for_rejects_lexical_prefix_sibling(self) -> None:
        ensure_repo_on_path()

        from passtree.errors import PathEscapeError
        from passtree.store import StoreResolver

        with tempfile.TemporaryDirectory() as td:
            root = make_store(Path(td) / "b", ["x"])
            make_store(Path(td) / "bc", ["secret"])
            resolver = StoreResolver(str(root))
            with self.assertRaises(PathEscapeError):
                resolver.path_for("../bc/secret")

    def test_path_for_rejects_symlink_escape(self) -> None:
        ensure_repo_on_path()

        from passtree.errors import PathEscapeError
        from passtree.store import StoreResolver

        with tempfile.TemporaryDirectory() as td:
            root = make_store(Path(td) / "store", ["inside"])
            outside = make_store(Path(td) / "outside", ["klaus"])
            os.symlink(str(outside), str(root / "link"))

            resolver = StoreResolver(str(root))
            with self.assertRaises(PathEscapeError):
                resolver.path_for("link/klaus")

    def test_path_for_follows_symlink_inside_store(self) -> None:
        ensure_repo_on_path()

        from passtree.store import StoreResolver

        with tempfile.TemporaryDirectory() as td:
            root = make_store(Path(td) / "store", ["real/entry"])
            os.symlink(str(root / "real"), str(root / "alias"))

            resolver = StoreResolver(str(root))
            self.assertEqual(resolver.path_for("alias/entry"), resolver.root / "real" / "entry.gpg")

    def test_symbolic_name_round_trip(self) -> None:
        ensure_repo_on_path()

        from passtree.store import StoreResolver

        names = ["a", "a/b", "email/work", "klaus.txt", "deep/er/still/x.y"]
        with tempfile.TemporaryDirectory() as td:
            root = make_store(Path(td) / "store", names)
            resolver = StoreResolver(str(root))
            for n in names:
                self.assertEqual(resolver.symbolic_name_for(resolver.path_for(n)), n)

            self.assertEqual(resolver.symbolic_name_for(resolver.root), "")

    def test_symbolic_name_requires_path_under_root(self) -> None:
        ensure_repo_on_path()

        from passtree.store import StoreResolver

        with tempfile.TemporaryDirectory() as td:
            root = make_store(Path(td) / "store", ["a"])
            resolver = StoreResolver(str(root))
            with self.assertRaises(ValueError):
                resolver.symbolic_name_for(Path("a.gpg"))
            with self.assertRaises(ValueError):
                resolver.symbolic_name_for(Path(td).resolve() / "elsewhere.gpg")

    def test_resolve_subdirectory(self) -> None:
        ensure_repo_on_path()

        from passtree.errors import NotFoundError, PathEscapeError
        from passtree.store import StoreResolver

        with tempfile.TemporaryDirectory() as td:
            root = make_store(Path(td) / "store", ["a/b/c", "e"])
            resolver = StoreResolver(str(root))

            self.assertEqual(resolver.resolve_subdirectory("a/b"), resolver.root / "a" / "b")
            with self.assertRaises(NotFoundError):
                resolver.resolve_subdirectory("missing")
            with self.assertRaises(NotFoundError):
                resolver.resolve_subdirectory("e.gpg")
            with self.assertRaises(PathEscapeError):
                resolver.resolve_subdirectory("..")


if __name__ == "__main__":
    unittest.main()
