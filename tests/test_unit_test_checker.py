import pytest

from prchecks.config import DEFAULT_UNIT_TESTS_BYPASS_PR_LABEL
from prchecks.models import ClassViolation, Severity
from prchecks.unit_test_checker import check_missing_tests, find_classes_missing_tests
from tests.conftest import make_file

MAIN = "app/src/main/java/org/wordpress"
TEST = "app/src/test/java/org/wordpress"


def test_new_class_without_test_is_an_error(make_snapshot, reporter):
    snapshot = make_snapshot(files={"Foo.kt": "@@ -0,0 +1,2 @@\n+class Foo extends Bar {\n+}"})

    check_missing_tests(snapshot, reporter)

    assert reporter.errors == [
        "Please add tests for class `Foo` (or add `unit-tests-exemption` label to ignore this)."
    ]


def test_class_used_in_added_test_line_is_covered(make_snapshot, reporter):
    snapshot = make_snapshot(
        files={
            "Foo.kt": "+class Foo extends Bar {",
            f"{TEST}/FooTest.kt": "+class FooTest {\n+    val foo = Foo(mock())",
        }
    )

    check_missing_tests(snapshot, reporter)

    assert reporter.outcomes == []


def test_subclass_exception_skips_class(make_snapshot, reporter):
    snapshot = make_snapshot(files={"Foo.kt": "+class Foo extends Bar {"})

    check_missing_tests(snapshot, reporter, subclasses_exceptions=[r"^Bar$"])

    assert reporter.outcomes == []


def test_bypass_label_downgrades_to_warning(make_snapshot, reporter):
    snapshot = make_snapshot(
        files={"Foo.kt": "+class Foo extends Bar {"},
        labels=[DEFAULT_UNIT_TESTS_BYPASS_PR_LABEL],
    )

    check_missing_tests(snapshot, reporter)

    assert reporter.warnings == [
        "Class `Foo` is missing tests, but `unit-tests-exemption` label was set to ignore this."
    ]
    assert reporter.errors == []


def test_default_exceptions():
    files = [
        make_file(f"{MAIN}/ui/ItemViewHolder.kt", "+class ItemViewHolder(view: View) : Base {"),
        make_file(f"{MAIN}/di/AppModule.kt", "+abstract class AppModule {"),
        make_file(f"{MAIN}/ui/HomeFragment.kt", "+class HomeFragment : Fragment() {"),
        make_file(f"{MAIN}/ui/Main.java", "+public class Main extends AppCompatActivity {"),
        make_file(f"{MAIN}/ui/Adapter.kt", "+class Adapter : RecyclerView.Adapter<VH>() {"),
    ]

    assert find_classes_missing_tests(files) == []


def test_removed_class_is_not_new():
    files = [
        make_file(
            f"{MAIN}/Foo.kt",
            "-class Foo(val a: Int) {\n+class Foo(val a: Int, val b: Int) {",
        )
    ]

    assert find_classes_missing_tests(files) == []


def test_class_moved_between_files_is_not_new():
    files = [
        make_file(f"{MAIN}/old/Foo.kt", "-internal class Foo {"),
        make_file(f"{MAIN}/new/Foo.kt", "+internal class Foo {"),
    ]

    assert find_classes_missing_tests(files) == []


def test_private_classes_are_ignored():
    files = [make_file(f"{MAIN}/Foo.kt", "+    private class Helper {")]

    assert find_classes_missing_tests(files) == []


@pytest.mark.parametrize(
    "line, name",
    [
        ("+@Singleton class Repo @Inject constructor(val api: Api) {", "Repo"),
        ("+expect class Clock {", "Clock"),
        ("+@Deprecated public class Svc {", "Svc"),
    ],
)
def test_annotated_and_multiplatform_classes_are_checked(line, name):
    files = [make_file(f"{MAIN}/X", line)]

    assert find_classes_missing_tests(files) == [ClassViolation(name, f"{MAIN}/X")]


def test_local_classes_are_ignored():
    files = [make_file(f"{MAIN}/Foo.kt", "+    fun build() { class Local {")]

    assert find_classes_missing_tests(files) == []


def test_usage_must_be_a_whole_word():
    files = [
        make_file(f"{MAIN}/Foo.kt", "+class Foo {"),
        make_file(f"{TEST}/BarTest.kt", "+    val x = FooBar()"),
    ]

    assert find_classes_missing_tests(files) == [ClassViolation("Foo", f"{MAIN}/Foo.kt")]


def test_context_and_removed_test_lines_do_not_count():
    files = [
        make_file(f"{MAIN}/Foo.kt", "+class Foo {"),
        make_file(f"{TEST}/FooTest.kt", " val foo = Foo()\n-    Foo().run()"),
    ]

    assert find_classes_missing_tests(files) == [ClassViolation("Foo", f"{MAIN}/Foo.kt")]


def test_class_added_in_test_file_is_not_checked():
    files = [make_file(f"{TEST}/FakeRepo.kt", "+class FakeRepo {")]

    assert find_classes_missing_tests(files) == []


def test_same_name_in_two_files_reports_both(make_snapshot, reporter):
    snapshot = make_snapshot(
        files={
            f"{MAIN}/a/Util.kt": "+class Util {",
            f"{MAIN}/b/Util.kt": "+class Util {",
        }
    )

    check_missing_tests(snapshot, reporter, bypass_label=None)

    assert [o.severity for o in reporter.outcomes] == [Severity.ERROR, Severity.ERROR]
    assert reporter.errors == ["Please add tests for class `Util`."] * 2


def test_custom_test_file_patterns():
    files = [
        make_file("src/main/Foo.kt", "+class Foo {"),
        make_file("spec/FooSpec.kt", "+describe(Foo::class)"),
    ]

    assert find_classes_missing_tests(files, test_file_patterns=[r"^spec/"]) == []
    assert len(find_classes_missing_tests(files)) == 1
