import pytest
import rapids


def test_no_keys_until_bound():
    packet = rapids.Packet({'need': 'car_rental_offer'})
    assert packet.keys() == []
    assert 'need' not in packet

    with pytest.raises(AttributeError):
        packet.need

    with pytest.raises(AttributeError):
        packet.need = 'something else'


def test_bind():
    packet = rapids.Packet({'need': 'car_rental_offer'})
    packet.bind('need', 'car_rental_offer')
    packet.bind('user')

    assert packet.keys() == ['need', 'user']
    assert 'need' in packet
    assert packet.need == 'car_rental_offer'
    assert packet['need'] == 'car_rental_offer'
    assert packet.user is None
    assert packet.get('user', 'default') is None
    assert packet.get('missing', 'default') == 'default'

    packet.need = 'hotel_offer'
    assert packet.need == 'hotel_offer'

    packet['user'] = 'fred'
    assert packet.user == 'fred'

    with pytest.raises(KeyError):
        packet['missing'] = 'value'


def test_non_identifier_keys():
    packet = rapids.Packet({'solution-id': 12, 'keys': 'k'})
    packet.bind('solution-id', 12)
    packet.bind('keys', 'k')

    assert packet['solution-id'] == 12
    assert packet['keys'] == 'k'
    assert callable(packet.keys)


def test_must_wrap_an_object():
    for fields in ([1, 2], 'text', 5, None):
        with pytest.raises(TypeError):
            rapids.Packet(fields)


def test_read_count():
    assert rapids.Packet({}).system_read_count == 0
    assert rapids.Packet({'system_read_count': 4}).system_read_count == 5

    with pytest.raises(TypeError):
        rapids.Packet({'system_read_count': 'four'})


def test_clone_with_name():
    packet = rapids.Packet({'need': 'offer', 'contributing_services': ['upstream']})
    packet.bind('need', 'offer')

    clone = packet.clone_with_name('downstream')

    assert clone is not packet
    assert packet.service_name is None
    assert clone.service_name == 'downstream'
    assert clone.need == 'offer'
    assert clone.keys() == packet.keys()
    assert packet.contributing_services == ['upstream']
    assert clone.contributing_services == ['upstream', 'downstream']

    clone.need = 'changed'
    assert packet.need == 'offer'


def test_clone_is_deep():
    fields = {'solutions': [{'price': 10}]}
    packet = rapids.Packet(fields)
    packet.bind('solutions', fields['solutions'])

    clone = packet.clone_with_name('service')
    clone.solutions[0]['price'] = 20
    clone.solutions.append({'price': 30})

    assert packet.solutions == [{'price': 10}]
    assert fields == {'solutions': [{'price': 10}]}


def test_to_json():
    fields = {'need': 'offer', 'other': [1, 2], 'system_read_count': 1}
    packet = rapids.Packet(fields)
    packet.bind('need', fields['need'])
    packet.bind('solution', fields.get('solution'))
    packet.bind('user', fields.get('user'))

    clone = packet.clone_with_name('offer_engine')
    clone.solution = 'discount'

    decoded = rapids.json.loads(clone.to_json())

    assert decoded['need'] == 'offer'
    assert decoded['other'] == [1, 2]
    assert decoded['solution'] == 'discount'
    assert 'user' not in decoded
    assert decoded['system_read_count'] == 2
    assert decoded['contributing_services'] == ['offer_engine']

    # Republishing the clone and reading it again continues the count.

    again = rapids.Packet(decoded)
    assert again.system_read_count == 3


def test_malformed_system_keys_warn():
    problems = rapids.PacketProblems()
    packet = rapids.Packet({'system_read_count': True, 'contributing_services': 'x'}, problems)

    assert packet.system_read_count == 0
    assert packet.contributing_services == []
    assert len(problems.warnings) == 2
    assert problems.has_errors() == False

    # Without a report to warn into, the keys are quietly ignored.

    assert rapids.Packet({'system_read_count': 1.5}).system_read_count == 0



# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
