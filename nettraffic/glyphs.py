def surrogatepass(code):
    return code.encode('utf-16', 'surrogatepass').decode('utf-16')

# Arrows
cod_arrow_small_down           = surrogatepass('\uea9d')
cod_arrow_small_up             = surrogatepass('\ueaa0')

# Network
md_wifi_strength_4             = surrogatepass('\udb82\udd28')
md_wifi_strength_alert_outline = surrogatepass('\udb82\udd2b')
md_network_off                 = surrogatepass('\udb83\udc9b')
md_network                     = surrogatepass('\udb81\udef3')

# Misc
icon_spacer                    = '  '
md_alert                       = surrogatepass('\udb80\udc26')
