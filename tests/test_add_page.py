import importlib.util
import sys
from datetime import date
from pathlib import Path

from finance_tracker import shared_ui
from finance_tracker.store import MemoryBackend, TrackerStore

PAGES_DIR = Path(__file__).resolve().parents[1] / 'finance_tracker' / 'pages'
FORM_KEYS = ('add_type', 'add_category', 'add_amount', 'add_date', 'add_note')


class _FakeStreamlit:
    """Widgets return whatever is already in session_state, like a rerun would."""

    def __init__(self, session_state, click_save):
        self.session_state = session_state
        self.sidebar = self
        self.click_save = click_save
        self.errors = []
        self.reruns = 0

    def __getattr__(self, name):
        return lambda *args, **kwargs: None

    def radio(self, label, options, key=None, **kwargs):
        return self.session_state.get(key, options[0])

    def selectbox(self, label, options, key=None, **kwargs):
        return self.session_state.get(key, options[0])

    def number_input(self, label, key=None, value=None, **kwargs):
        return self.session_state.get(key, value)

    def date_input(self, label, key=None, **kwargs):
        return self.session_state.get(key, date(2024, 3, 15))

    def text_input(self, label, key=None, **kwargs):
        return self.session_state.get(key, '')

    def button(self, label, **kwargs):
        return self.click_save

    def error(self, text):
        self.errors.append(text)

    def rerun(self):
        self.reruns += 1


def _run_add_page(monkeypatch, fake):
    monkeypatch.setitem(sys.modules, 'streamlit', fake)
    monkeypatch.setattr(shared_ui, 'st', fake)
    page_path = next(PAGES_DIR.glob('1_*_Add.py'))
    spec = importlib.util.spec_from_file_location('add_page_test', page_path)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)


def _filled_form(store):
    return {
        shared_ui.STORE_KEY: store,
        'add_type': 'expense',
        'add_category': 'food',
        'add_amount': 12.5,
        'add_date': date(2024, 3, 1),
        'add_note': 'lunch',
    }


def test_save_clears_every_form_field(monkeypatch):
    store = TrackerStore(MemoryBackend())
    fake = _FakeStreamlit(_filled_form(store), click_save=True)

    _run_add_page(monkeypatch, fake)

    [record] = store.load_records()
    assert (record.category, record.amount, record.date) == ('food', 12.5, '2024-03-01')
    assert not any(key in fake.session_state for key in FORM_KEYS)
    assert fake.session_state[shared_ui.FLASH_KEY] == ('Saved! Record added successfully.', False)
    assert fake.reruns == 1


def test_rejected_save_keeps_form_fields(monkeypatch):
    store = TrackerStore(MemoryBackend())
    form = _filled_form(store)
    form['add_amount'] = 0.004
    fake = _FakeStreamlit(form, click_save=True)

    _run_add_page(monkeypatch, fake)

    assert store.load_records() == []
    assert fake.errors == ['Amount must be a number greater than 0.']
    assert all(key in fake.session_state for key in FORM_KEYS)
    assert fake.reruns == 0
