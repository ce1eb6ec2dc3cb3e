import rapids


def test_empty():
    problems = rapids.PacketProblems('{}')

    assert problems.has_errors() == False
    assert problems.has_messages() == False
    assert bool(problems) == False
    assert str(problems) == 'No errors detected in JSON:\n\t{}'


def test_warnings_are_not_errors():
    problems = rapids.PacketProblems('{}')
    problems.information('just so you know')
    problems.warning('be careful')

    assert problems.has_errors() == False
    assert problems.has_messages() == True
    assert bool(problems) == True


def test_errors():
    problems = rapids.PacketProblems('{}')
    problems.error('Missing required key type')

    assert problems.has_errors() == True
    assert problems.errors == ['Missing required key type']
    assert problems.severe_errors == []


def test_severe_errors():
    problems = rapids.PacketProblems('not-json')
    problems.severe_error('Invalid JSON format. Please check syntax carefully.')

    assert problems.has_errors() == True
    assert problems.errors == []
    assert len(problems.severe_errors) == 1


def test_report():
    problems = rapids.PacketProblems(b'{"debug": true}')
    problems.severe_error('severe one')
    problems.error('error one')
    problems.error('error two')
    problems.warning('warning one')

    report = str(problems)

    assert report.startswith('Errors and/or messages exist. Original JSON string is:\n\t{"debug": true}')
    assert 'Severe errors (1):\n\tsevere one' in report
    assert 'Errors (2):\n\terror one\n\terror two' in report
    assert 'Warnings (1):\n\twarning one' in report
    assert 'Information' not in report

    # Sections appear in decreasing order of severity.

    assert report.index('Severe errors') < report.index('Errors (') < report.index('Warnings')


def test_repr():
    problems = rapids.PacketProblems()
    problems.error('one')
    assert repr(problems) == '<PacketProblems severe=0 errors=1 warnings=0 information=0>'


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
