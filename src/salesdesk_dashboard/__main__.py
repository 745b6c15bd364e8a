from salesdesk_dashboard.cli import main

raise SystemExit(main())
