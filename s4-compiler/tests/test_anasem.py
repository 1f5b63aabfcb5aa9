from s4_anasem import SymbolTable


def test_enter_keeps_first_occurrence_order():
    ts = SymbolTable()
    for name in ['b', 'a', 'b', 'c', 'a']:
        ts.enter(name)

    assert ts.size() == 3
    assert [ts.name_at(i) for i in range(ts.size())] == ['b', 'a', 'c']
    assert list(ts) == ['b', 'a', 'c']


def test_names_compared_by_equality_and_case():
    ts = SymbolTable()
    ts.enter('abc')
    ts.enter(''.join(['a', 'b', 'c']))
    ts.enter('ABC')

    assert len(ts) == 2
    assert 'abc' in ts
    assert 'ABC' in ts
    assert 'x' not in ts
