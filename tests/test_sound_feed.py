"""
Tests for the public sound listing flow (query, uploader join, transform).
"""

from services.sound_feed import LOAD_FAILED_MESSAGE, SoundFeed, SoundFeedResult


class TestHomeListing:
    def test_only_public_sounds_are_listed(self, services, make_user, make_sound):
        owner = make_user()
        make_sound("Open Rain", owner, minutes=1)
        make_sound("Secret Rain", owner, is_public=False, minutes=2)

        result = services.get_sound_feed().load_home()

        assert result.ok
        assert [s["title"] for s in result.sounds] == ["Open Rain"]

    def test_newest_first_and_capped_at_twelve(self, services, make_user, make_sound):
        owner = make_user()
        for minute in range(15):
            make_sound(f"Public {minute:02d}", owner, minutes=minute)
        for minute in range(15, 18):
            make_sound(f"Private {minute:02d}", owner, is_public=False, minutes=minute)

        result = services.get_sound_feed().load_home()

        titles = [s["title"] for s in result.sounds]
        assert len(titles) == 12
        assert titles == [f"Public {minute:02d}" for minute in range(14, 2, -1)]

    def test_uploader_is_resolved_to_username_only(self, services, make_user, make_sound):
        owner = make_user("river_sounds")
        make_sound("Stream", owner)

        sound = services.get_sound_feed().load_home().sounds[0]

        assert sound["uploader"] == {"_id": owner["_id"], "username": "river_sounds"}
        assert "passwordHash" not in sound["uploader"]

    def test_missing_uploader_becomes_none(self, services, make_sound):
        make_sound("Orphan")

        sound = services.get_sound_feed().load_home().sounds[0]

        assert sound["uploader"] is None

    def test_full_url_mirrors_file_path(self, services, make_user, make_sound):
        make_sound("Waves", make_user(), file_path="https://cdn.example.com/waves.mp3")

        sound = services.get_sound_feed().load_home().sounds[0]

        assert sound["fullUrl"] == "https://cdn.example.com/waves.mp3"
        assert sound["filePath"] == sound["fullUrl"]


class TestMoodListing:
    def test_filters_by_category(self, services, make_user, make_sound):
        owner = make_user()
        make_sound("Birds", owner, category="happy")
        make_sound("Bells", owner, category="meditation")

        result = services.get_sound_feed().load_mood("meditation")

        assert [s["title"] for s in result.sounds] == ["Bells"]

    def test_all_means_no_filter(self, services, make_user, make_sound):
        owner = make_user()
        make_sound("Birds", owner, category="happy", minutes=1)
        make_sound("Bells", owner, category="meditation", minutes=2)

        result = services.get_sound_feed().load_mood("all")

        assert [s["title"] for s in result.sounds] == ["Bells", "Birds"]


class TestFailures:
    def test_failure_result_when_database_raises(self, log_messages):
        class BrokenDatabase:
            def get_public_sounds(self, **kwargs):
                raise RuntimeError("connection reset by peer")

        result = SoundFeed(BrokenDatabase()).load_home()

        assert not result.ok
        assert result.sounds == []
        assert result.error == LOAD_FAILED_MESSAGE
        logged = "\n".join(log_messages)
        assert "Error fetching sounds" in logged
        assert "connection reset by peer" in logged

    def test_result_constructors(self):
        assert SoundFeedResult.success([{"title": "x"}]).ok
        failed = SoundFeedResult.failure("nope")
        assert not failed.ok and failed.error == "nope" and failed.sounds == []
