from sit_break.__main__ import build_parser, print_schedule


def test_parser_defaults():
    args = build_parser().parse_args([])
    assert (args.test, args.user, args.data_dir, args.no_tray) == (False, None, None, False)


def test_parser_flags():
    args = build_parser().parse_args(["--test", "--user", "alice", "--no-tray", "-v"])
    assert args.test and args.no_tray and args.verbose
    assert args.user == "alice"


def test_print_schedule(engine, capsys):
    print_schedule(engine)
    out = capsys.readouterr().out
    assert "tester" in out
    assert "45 min" in out
    assert "09:00-18:00" in out
    assert "neck 5" in out
