"""
spectree describing itself.

These specs run spectree trees inside the actions of another tree, the way
the library is meant to be used from a test function.
"""

from spectree import RunConfig, SpecArgumentError, SpecFailed, given

QUIET = RunConfig(echo=False)


def _noop():
    pass


def _explode():
    raise ValueError("bad")


class TestDescribeWhen:
    def test_invalid_arguments_raise(self):
        box = {}

        (
            given("a do-nothing given", lambda: box.update(spec=given("x", _noop)))
            .when("calling when with an empty description", lambda: box["spec"].when("", _noop))
            .it_should_throw(SpecArgumentError)
            .the_exception("should name 'description'", lambda e: "description" in str(e))
            .when("calling when without an action", lambda: box["spec"].when("x", None))
            .it_should_throw(SpecArgumentError)
            .the_exception("should name 'action'", lambda e: "action" in str(e))
            .go_isolated(config=QUIET)
        )

    def test_exceptions_prevent_children_from_running(self):
        box = {"ran": False}

        def build():
            box["spec"] = given("x", _noop).when("y", _explode).it("should not run this", lambda: box.update(ran=True))

        (
            given("a spec with a bad when above an it", build)
            .when("the spec is executed", lambda: box["spec"].go(config=QUIET))
            .it_should_throw(SpecFailed)
            .it_holds("should not have run the it node", lambda: not box["ran"])
            .go_isolated(config=QUIET)
        )


class TestDescribeIt:
    def test_invalid_arguments_raise(self):
        box = {}

        (
            given("a do-nothing given", lambda: box.update(spec=given("x", _noop)))
            .when("calling it with an empty description", lambda: box["spec"].it("", _noop))
            .it_should_throw(SpecArgumentError)
            .the_exception("should name 'description'", lambda e: "description" in str(e))
            .when("calling it_holds without a predicate", lambda: box["spec"].it_holds("x", None))
            .it_should_throw(SpecArgumentError)
            .the_exception("should name 'predicate'", lambda e: "predicate" in str(e))
            .go_isolated(config=QUIET)
        )

    def test_side_effects_are_undone(self):
        box = {"count": 0}

        (
            given("a count of 23", lambda: box.update(count=23))
            .it_holds("should be 23", lambda: box["count"] == 23)
            .it("should let me set it to 24", lambda: box.update(count=24))
            .it_holds("should be 23 here, though", lambda: box["count"] == 23)
            .go_isolated(config=QUIET)
        )
