from gophkeeper.secret_cache import CachedSecret, Secret, SecretsCache


def by_id(secrets):
    return sorted(secrets, key=lambda s: s.id)


def test_cache_secrets_replaces_list():
    sut = SecretsCache()
    want = [Secret(id="1"), Secret(id="2")]

    sut.cache_secrets(want)
    assert by_id(sut.list_secrets()) == want

    want = [Secret(id="1")]
    sut.cache_secrets(want)
    assert by_id(sut.list_secrets()) == want


def test_cache_empty_secrets():
    sut = SecretsCache()

    sut.cache_secrets([])

    assert sut.list_secrets() == []


def test_ignore_already_cached_secret():
    sut = SecretsCache()
    sut.cache_secret(Secret(id="1", data="data"))

    sut.cache_secrets([Secret(id="1"), Secret(id="2")])

    assert by_id(sut.list_secrets()) == [Secret(id="1", data="data"), Secret(id="2")]
    assert sut.get_secret("1").data_cached is True
    assert sut.get_secret("2").data_cached is False


def test_cache_secret():
    sut = SecretsCache()
    want = Secret(id="1", data="secret")

    sut.cache_secret(want)

    assert sut.get_secret(want.id) == CachedSecret(want, data_cached=True)


def test_get_secret_from_list():
    sut = SecretsCache()
    want = Secret(id="1")
    sut.cache_secrets([want])

    got = sut.get_secret(want.id)

    assert got.secret == want
    assert got.data_cached is False


def test_get_missing_secret():
    assert SecretsCache().get_secret("1") is None


def test_remove_secret():
    sut = SecretsCache()
    sut.cache_secret(Secret(id="1", data="secret"))

    sut.remove_secret("1")

    assert sut.list_secrets() == []
    assert sut.get_secret("1") is None


def test_remove_secret_that_is_not_cached():
    sut = SecretsCache()

    sut.remove_secret("1")

    assert sut.list_secrets() == []