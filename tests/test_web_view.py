"""Tests for HTML output of rendered itineraries."""

from tripmind.itinerary.web_view import ItineraryWebView


def test_plain_text_is_escaped():
    html = ItineraryWebView().render_text("Fish & chips <b>cheap</b>")
    assert html == '<p class="itinerary-text">Fish &amp; chips &lt;b&gt;cheap&lt;/b&gt;</p>'


def test_rich_text_keeps_strong_markup_only():
    html = ItineraryWebView().render_text("See **<i>Big Ben</i>**")
    assert "<strong>&lt;i&gt;Big Ben&lt;/i&gt;</strong>" in html
    assert "<i>" not in html


def test_day_heading_has_calendar_icon():
    html = ItineraryWebView().render_text("Day 1: Rome")
    assert 'class="itinerary-day"' in html
    assert "fa-calendar-day" in html
    assert "<h3>Day 1 Rome</h3>" in html


def test_label_and_nested_body():
    html = ItineraryWebView().render_text("Accommodation: Hotel <Roma>")
    assert '<span class="itinerary-label-text">Accommodation:</span>' in html
    assert "fa-map-marker-alt" in html
    assert '<p class="itinerary-text itinerary-nested">Hotel &lt;Roma&gt;</p>' in html


def test_time_slot_body_on_same_line():
    html = ItineraryWebView().render_text("Morning: Colosseum tour")
    assert html == (
        '<div class="itinerary-label">'
        '<span class="itinerary-label-text">Morning:</span>'
        '<span class="itinerary-label-body">Colosseum tour</span>'
        '</div>'
    )


def test_bullet_and_spacer():
    html = ItineraryWebView().render_text("- Gelato stop, eat two\n")
    lines = html.split("\n")
    assert lines[0] == (
        '<div class="itinerary-bullet"><i class="fas fa-utensils"></i>'
        '<span>Gelato stop, eat two</span></div>'
    )
    assert lines[1] == '<div class="itinerary-spacer"></div>'


def test_generate_writes_page(tmp_path):
    output = tmp_path / "out" / "rome.html"
    path = ItineraryWebView().generate("Day 1\n- Pantheon", output, title="Rome & Co")
    assert path == output
    page = output.read_text()
    assert "<title>Rome &amp; Co - TripMind</title>" in page
    assert "<h3>Day 1</h3>" in page
    assert "<span>Pantheon</span>" in page
