"""Tk window for editing the network settings of stations."""

from __future__ import annotations

import argparse
import sys
import tkinter as tk
from dataclasses import fields, replace
from tkinter import messagebox, ttk
from typing import Callable, Mapping

from .config import ConfigError, Station
from .editor import StationEditor, ValidationError, field_has_error

TITLE = "Настройки сетевого взаимодействия"
NEW_STATION_LABEL = "Новая станция"

_ERROR_BG = "pink"
_OK_BG = "white"
_INT_MAX = 2**31 - 1
_SERVERS_ITEM = "servers"
_ITEM_PREFIX = "station-"

_GENERAL = (("name", "Название"), ("comments", "Комментарии"))
_TIMERS = (
    ("timeout0", "Тайм-аут T0, сек"),
    ("timeout1", "Тайм-аут T1, сек"),
    ("timeout2", "Тайм-аут T2, сек"),
    ("timeout3", "Тайм-аут T3, сек"),
)
_COEFFS_PORT = (("coeff_k", "Коэффициент K"), ("coeff_w", "Коэффициент W"), ("port", "Порт"))
_SERVER = (("server_address1", "Адрес1"), ("server_address2", "Адрес2"), ("server_address3", "Адрес3"))
_CLIENT = (("client_address1", "Адрес1"), ("client_address2", "Адрес2"), ("client_address3", "Адрес3"))

_SPIN_RANGES = {
    "timeout0": (0, _INT_MAX),
    "timeout1": (0, _INT_MAX),
    "timeout2": (0, _INT_MAX),
    "timeout3": (0, _INT_MAX),
    "coeff_k": (1, _INT_MAX),
    "coeff_w": (1, _INT_MAX),
    "port": (1, 65535),
}
_EDITABLE = tuple(f.name for f in fields(Station) if f.name != "id")
_SPIN_FIELDS = frozenset(_SPIN_RANGES)
_CHECKED_FIELDS = ("name",) + tuple(key for key, _ in _SERVER + _CLIENT)


def _form_texts(station: Station) -> dict[str, str]:
    """Return the text each input of the form shows for ``station``."""
    return {key: str(getattr(station, key)) for key in _EDITABLE}


def _texts_to_form(texts: Mapping[str, str], base: Station) -> Station:
    """Build the form contents from input texts on top of ``base``.

    Numeric inputs that do not hold an integer keep the value of ``base``.
    """
    changes: dict[str, object] = {}
    for key, text in texts.items():
        if key not in _EDITABLE:
            continue
        if key in _SPIN_FIELDS:
            try:
                changes[key] = int(text.strip())
            except ValueError:
                continue
        else:
            changes[key] = text
    return replace(base, **changes)


def _background_for(field: str, text: str) -> str:
    """Background colour of a checked input holding ``text``."""
    return _ERROR_BG if field_has_error(field, text) else _OK_BG


def _item_id(index: int) -> str:
    return f"{_ITEM_PREFIX}{index}"


class SettingsWindow:
    """Station tree on the left, the form of the selected station on the right."""

    def __init__(self, root: tk.Tk, editor: StationEditor) -> None:
        self.root = root
        self.editor = editor
        self._vars: dict[str, tk.StringVar] = {}
        self._widgets: dict[str, tk.Widget] = {}
        self._loading = False

        root.title(TITLE)
        root.geometry("600x400")
        self._build_top_bar()
        self._build_body()
        self._bind_events()
        self._refresh_tree()
        self._show_form()

    # Layout

    def _build_top_bar(self) -> None:
        bar = ttk.Frame(self.root, padding=5)
        bar.pack(fill="x")
        self.btn_new = ttk.Button(bar, text=NEW_STATION_LABEL, command=self._on_new_station)
        self.btn_save = ttk.Button(bar, text="Сохранить", command=self._on_save)
        self.btn_delete = ttk.Button(bar, text="Удалить", command=self._on_delete)
        for button in (self.btn_new, self.btn_save, self.btn_delete):
            button.pack(side="left", padx=(0, 5))
        ttk.Separator(self.root, orient="horizontal").pack(fill="x")

    def _build_body(self) -> None:
        body = ttk.Frame(self.root)
        body.pack(fill="both", expand=True)

        tree_frame = ttk.Frame(body)
        tree_frame.pack(side="left", fill="both", expand=True, padx=(0, 10))
        self.tree = ttk.Treeview(tree_frame, show="tree headings", selectmode="browse")
        self.tree.heading("#0", text="Название")
        self.tree.column("#0", minwidth=200, width=200)
        scroll_y = ttk.Scrollbar(tree_frame, orient="vertical", command=self.tree.yview)
        scroll_x = ttk.Scrollbar(tree_frame, orient="horizontal", command=self.tree.xview)
        self.tree.configure(yscrollcommand=scroll_y.set, xscrollcommand=scroll_x.set)
        self.tree.grid(row=0, column=0, sticky="nsew")
        scroll_y.grid(row=0, column=1, sticky="ns")
        scroll_x.grid(row=1, column=0, sticky="ew")
        tree_frame.rowconfigure(0, weight=1)
        tree_frame.columnconfigure(0, weight=1)
        self.tree.insert("", "end", iid=_SERVERS_ITEM, text="Серверы", open=True)

        form = ttk.Frame(body, padding=10)
        form.pack(side="left", fill="both", expand=True)

        general = ttk.LabelFrame(form, text="Общие", padding=10)
        general.pack(fill="x", pady=(0, 10))
        self._id_var = tk.StringVar()
        self._id_entry = self._add_row(
            general, "Идентификатор",
            lambda row: tk.Entry(row, textvariable=self._id_var, state="readonly"),
        )
        for key, label in _GENERAL:
            self._add_entry(general, key, label)

        numbers = ttk.Frame(general)
        numbers.pack(fill="x", pady=(10, 0))
        timers = ttk.Frame(numbers)
        timers.pack(side="left", fill="x", expand=True, padx=(0, 10))
        coeffs_port = ttk.Frame(numbers)
        coeffs_port.pack(side="left")
        for key, label in _TIMERS:
            self._add_spin(timers, key, label)
        for key, label in _COEFFS_PORT:
            self._add_spin(coeffs_port, key, label)

        server = ttk.LabelFrame(form, text="Свойства TCP/IP для сервера", padding=10)
        server.pack(fill="x", pady=(0, 10))
        for key, label in _SERVER:
            self._add_entry(server, key, label)

        client = ttk.LabelFrame(form, text="Свойства TCP/IP для клиента", padding=10)
        client.pack(fill="x")
        for key, label in _CLIENT:
            self._add_entry(client, key, label)

    def _add_row(
        self, parent: tk.Misc, label: str, factory: Callable[[tk.Misc], tk.Widget]
    ) -> tk.Widget:
        row = ttk.Frame(parent)
        row.pack(fill="x", pady=2)
        ttk.Label(row, text=label, anchor="w").pack(side="left", padx=(0, 10))
        widget = factory(row)
        widget.pack(side="left", fill="x", expand=True)
        return widget

    def _add_entry(self, parent: tk.Misc, key: str, label: str) -> None:
        var = tk.StringVar()
        self._vars[key] = var
        self._widgets[key] = self._add_row(
            parent, label, lambda row: tk.Entry(row, textvariable=var, bg=_OK_BG)
        )

    def _add_spin(self, parent: tk.Misc, key: str, label: str) -> None:
        low, high = _SPIN_RANGES[key]
        var = tk.StringVar()
        self._vars[key] = var
        self._widgets[key] = self._add_row(
            parent, label,
            lambda row: tk.Spinbox(
                row, from_=low, to=high, increment=1, textvariable=var, width=10
            ),
        )

    def _bind_events(self) -> None:
        self.tree.bind("<<TreeviewSelect>>", self._on_tree_selection_changed)
        for key in _CHECKED_FIELDS:
            self._vars[key].trace_add("write", lambda *_args, k=key: self._on_field_changed(k))
        self.root.bind("<Control-s>", lambda _event: self._invoke(self.btn_save))
        self.root.bind("<Delete>", lambda _event: self._invoke(self.btn_delete))

    # State shown on screen

    def _invoke(self, button: ttk.Button) -> str:
        if button.instate(["!disabled"]):
            button.invoke()
        return "break"

    def _on_field_changed(self, key: str) -> None:
        if self._loading:
            return
        self._widgets[key].configure(bg=_background_for(key, self._vars[key].get()))

    def _reset_field_styles(self) -> None:
        for key in _CHECKED_FIELDS:
            self._widgets[key].configure(bg=_OK_BG)

    def _show_form(self, reset_styles: bool = True) -> None:
        self._loading = True
        try:
            form_id = self.editor.form_id
            self._id_var.set("" if form_id is None else str(form_id))
            for key, text in _form_texts(self.editor.form).items():
                self._vars[key].set(text)
        finally:
            self._loading = False
        if reset_styles:
            self._reset_field_styles()
        else:
            for key in _CHECKED_FIELDS:
                self._on_field_changed(key)
        self._update_sensitivity()

    def _update_sensitivity(self) -> None:
        editor = self.editor
        state = "normal" if editor.form_sensitive else "disabled"
        for widget in self._widgets.values():
            widget.configure(state=state)
        self._id_entry.configure(state="readonly" if editor.form_sensitive else "disabled")
        self.btn_save.state(["!disabled"] if editor.save_enabled else ["disabled"])
        self.btn_delete.state(["!disabled"] if editor.delete_enabled else ["disabled"])

    def _collect_form(self) -> None:
        texts = {key: var.get() for key, var in self._vars.items()}
        self.editor.form = _texts_to_form(texts, self.editor.form)

    def _refresh_tree(self) -> None:
        self.tree.delete(*self.tree.get_children(_SERVERS_ITEM))
        for index, station in enumerate(self.editor.stations):
            self.tree.insert(_SERVERS_ITEM, "end", iid=_item_id(index), text=station.name)
        self.tree.item(_SERVERS_ITEM, open=True)
        current = self.editor.current
        if current is None:
            self.tree.selection_set(())
        else:
            self.tree.selection_set(_item_id(current))
            self.tree.see(_item_id(current))

    # Handlers

    def _on_tree_selection_changed(self, _event: object = None) -> None:
        selection = self.tree.selection()
        if not selection:
            self.editor.clear_selection()
            self._update_sensitivity()
            return
        item = selection[0]
        if item == _SERVERS_ITEM:
            self.editor.select(None)
            self._update_sensitivity()
            return
        index = int(item.removeprefix(_ITEM_PREFIX))
        if index >= len(self.editor.stations):
            return
        self.editor.select(index)
        self._show_form()

    def _on_new_station(self) -> None:
        self.editor.new_station()
        self._show_form()

    def _on_save(self) -> None:
        self._collect_form()
        try:
            saved = self.editor.save()
        except ValidationError as exc:
            messagebox.showerror("Ошибка", str(exc), parent=self.root)
            return
        if saved is not None:
            self._refresh_tree()

    def _on_delete(self) -> None:
        self.editor.delete()
        self._refresh_tree()
        self._show_form(reset_styles=self.editor.is_station)


def main(argv: list[str] | None = None) -> int:
    """Open the settings window; returns the process exit status."""
    parser = argparse.ArgumentParser(
        prog="stationsettings", description="Edit the network settings of stations."
    )
    parser.add_argument(
        "--home", help="directory holding the configuration file (default: $HOME)"
    )
    args = parser.parse_args(argv)

    try:
        editor = StationEditor(args.home)
    except ConfigError as exc:
        print(exc, file=sys.stderr)
        return 1

    root = tk.Tk()
    SettingsWindow(root, editor)
    root.mainloop()
    return 0


if __name__ == "__main__":
    sys.exit(main())