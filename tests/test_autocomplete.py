from journalvault.autocomplete import (
    DEFAULT_LIMIT,
    Suggestion,
    Trigger,
    find_active_trigger,
    insert_suggestion,
    suggest,
)
from journalvault.models import Person, Place


def test_results_capped_at_ten() -> None:
    people = [Person(id=f"Person {i:02d}", name=f"Person {i:02d}") for i in range(50)]

    results = suggest("person", Trigger.MENTION, [], people)

    assert len(results) == DEFAULT_LIMIT == 10
    assert [s.display_name for s in results] == [f"Person {i:02d}" for i in range(10)]
    assert len(suggest("person", Trigger.MENTION, [], people, limit=3)) == 3


def test_alias_match_offers_alias_then_full_name(places, people) -> None:
    results = suggest("al", Trigger.MENTION, places, people)

    assert [(s.display_name, s.matched_alias) for s in results] == [
        ("Alice Smith", "Al"),
        ("Alice Smith", None),
    ]
    assert results[0].insertion_text == "[[Alice Smith|Al]]"
    assert results[0].subtitle == "as: Al"
    assert results[1].insertion_text == "[[Alice Smith]]"
    assert results[0].id != results[1].id


def test_prefix_matches_rank_first_then_alphabetical() -> None:
    people = [Person(id=n, name=n) for n in ("Brian", "Dan", "Anna")]
    places = [Place(id="Andes Cafe", name="Andes Cafe")]

    results = suggest("an", Trigger.WIKI_LINK, places, people)

    assert [s.display_name for s in results] == ["Andes Cafe", "Anna", "Brian", "Dan"]


def test_mention_offers_people_only(places, people) -> None:
    results = suggest("", Trigger.MENTION, places, people)
    assert {s.kind for s in results} == {"person"}

    results = suggest("", Trigger.WIKI_LINK, places, people)
    assert [s.display_name for s in results] == [
        "Alice Smith",
        "Blue Bottle",
        "Bob Brown",
        "Central Park",
    ]


def test_subtitles(places, people) -> None:
    by_name = {s.display_name: s for s in suggest("", Trigger.WIKI_LINK, places, people)}
    assert by_name["Blue Bottle"].subtitle == "1 Ferry Building"
    assert by_name["Central Park"].subtitle is None
    assert by_name["Bob Brown"].subtitle == "Colleague"
    assert by_name["Central Park"].id == "place-Central Park"


def test_unrecognized_relationship_subtitle_is_other() -> None:
    people = [Person(id="Mallory", name="Mallory", relationship="nemesis")]
    [suggestion] = suggest("mal", Trigger.MENTION, [], people)
    assert suggestion.subtitle == "Other"


def test_insert_replaces_trigger_and_search(people) -> None:
    text = "Coffee with [[Al"
    new_text, cursor = insert_suggestion(text, Suggestion(people[0], "Al"), Trigger.WIKI_LINK)

    assert new_text == "Coffee with [[Alice Smith|Al]] "
    assert cursor == len(new_text)


def test_insert_for_mention(people) -> None:
    new_text, cursor = insert_suggestion("Lunch with @bo", Suggestion(people[1]), Trigger.MENTION)
    assert new_text == "Lunch with [[Bob Brown]] "
    assert cursor == len(new_text)


def test_insert_without_trigger_is_a_no_op(people) -> None:
    assert insert_suggestion("plain text", Suggestion(people[0]), Trigger.MENTION) == (
        "plain text",
        len("plain text"),
    )


def test_find_active_trigger() -> None:
    assert find_active_trigger("Coffee at [[blu") == (Trigger.WIKI_LINK, "blu")
    assert find_active_trigger("Coffee at [[") == (Trigger.WIKI_LINK, "")
    assert find_active_trigger("hey @ali") == (Trigger.MENTION, "ali")
    assert find_active_trigger("hey @ali and") is None
    assert find_active_trigger("at [[Central Park]] today") is None
    assert find_active_trigger("nothing here") is None
